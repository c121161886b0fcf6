from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Iterable, List, Optional

from ..infra.contracts import LogSink, Prompter
from ..infra.models import ASSET_CATEGORY_VALUES, Asset
from ..reporting import render
from ..stores import Registry
from ..utils.time import Clock, local_now, today


def search_by_prefix(assets: Iterable[Asset], term: str) -> List[Asset]:
    """Assets whose name starts with ``term``, ignoring case. Unnamed assets never match."""
    needle = term.casefold()
    return [a for a in assets if a.name is not None and a.name.casefold().startswith(needle)]


class AssetCatalog:
    def __init__(
        self,
        registry: Registry,
        prompter: Prompter,
        log: LogSink,
        echo: Callable[[str], Any] = print,
        clock: Clock = local_now,
    ) -> None:
        self.registry = registry
        self.prompter = prompter
        self.log = log
        self.echo = echo
        self.clock = clock

    def create(self) -> Optional[Asset]:
        departments = self.registry.departments
        if not departments.active():
            self.echo("An asset cannot be created without at least one active department.")
            self.echo("Create a department first and leave it ACTIVE.")
            self.log.append("Error: Attempt to create an asset with no active department.")
            self.prompter.pause()
            return None

        self.echo(render.heading("CREATE ASSET"))
        name = self.prompter.read_dynamic_string("Asset name: ")
        c = self.prompter.read_int_in_range(
            1, 5, "Asset category:\n1 - Vehicle\n2 - IT equipment\n3 - Furniture\n4 - Tool\n5 - Other\n"
        )
        unit_cost = self.prompter.read_positive_float("Asset value in euros: ")

        max_id = departments.max_id()
        while True:
            did = self.prompter.read_int_in_range(0, max_id, "ID of the department that owns this asset: ")
            if departments.is_active(did):
                break
            self.echo("Invalid ID, try again.")

        location = self.prompter.read_dynamic_string("Asset location: ")

        store = self.registry.assets
        a = Asset(
            asset_id=store.next_id(),
            name=name,
            category=ASSET_CATEGORY_VALUES[c - 1],
            department_id=did,
            location=location,
            unit_cost=unit_cost,
            acquired_on=today(self.clock),
        )
        store.add(a)
        store.adjust_available(1)

        self.echo(f"Asset {a.asset_id} created.")
        self.log.append("Info: A new asset was created.")
        self.prompter.pause()
        return a

    def list(self) -> None:
        for line in render.asset_listing(self.registry.assets.records()):
            self.echo(line)
        self.prompter.pause()

    def list_by_department(self) -> None:
        for line in render.assets_by_department(self.registry.departments.records(), self.registry.assets.records()):
            self.echo(line)
        self.prompter.pause()

    def decommission(self) -> Optional[Asset]:
        """Decommission an operational or inactive asset and stamp today's date on it."""
        aid = self.prompter.read_positive_int("ID of the asset to decommission: ")
        a = self.registry.assets.find(aid)
        if a is None or a.state not in ("operational", "inactive"):
            self.echo("Invalid ID, try again.")
            self.log.append("Warning: Attempt to decommission an unknown asset or one in maintenance.")
            self.prompter.pause()
            return None

        was_operational = a.state == "operational"
        a = self.registry.assets.replace(replace(a, state="decommissioned", decommissioned_on=today(self.clock)))
        if was_operational:
            self.registry.assets.adjust_available(-1)

        self.echo("The asset was decommissioned.")
        self.log.append("Info: An asset was decommissioned.")
        self.prompter.pause()
        return a

    def search(self) -> List[Asset]:
        if len(self.registry.assets) == 0:
            self.echo("There are no assets to search.")
            self.prompter.pause()
            return []

        term = self.prompter.read_dynamic_string("Search term (start of the asset name): ")
        if not term:
            self.echo("Invalid term.")
            return []

        found = search_by_prefix(self.registry.assets, term)
        self.echo(f"\n--- RESULTS FOR '{term}' ---")
        for a in found:
            self.echo(f"ID {a.asset_id}: {a.name}")
        if not found:
            self.echo(f"No asset starts with '{term}'.")
        self.prompter.pause()
        return found
