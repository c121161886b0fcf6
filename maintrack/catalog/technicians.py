from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Optional

from ..infra.contracts import LogSink, Prompter
from ..infra.models import TECHNICIAN_SPECIALTY_VALUES, Technician
from ..reporting import render
from ..stores import Registry


class TechnicianCatalog:
    def __init__(self, registry: Registry, prompter: Prompter, log: LogSink, echo: Callable[[str], Any] = print) -> None:
        self.registry = registry
        self.prompter = prompter
        self.log = log
        self.echo = echo

    def create(self) -> Technician:
        self.echo(render.heading("CREATE TECHNICIAN"))
        name = self.prompter.read_validated_name("Technician name: ")
        s = self.prompter.read_int_in_range(
            1, 5, "Specialty:\n1 - IT technician\n2 - Mechanic\n3 - Electrician\n4 - General maintenance\n5 - Other\n"
        )

        store = self.registry.technicians
        t = Technician(technician_id=store.next_id(), name=name, specialty=TECHNICIAN_SPECIALTY_VALUES[s - 1])
        store.add(t)
        store.active_count += 1

        self.echo(f"Technician {t.technician_id} created.")
        self.log.append("Info: A new technician was created.")
        self.prompter.pause()
        return t

    def list(self) -> None:
        for line in render.technician_listing(self.registry.technicians.records(), self.registry.orders.records()):
            self.echo(line)
        self.prompter.pause()

    def deactivate(self) -> Optional[Technician]:
        """Deactivate an active technician after confirmation. Busy technicians are refused."""
        self.echo(render.heading("DEACTIVATE TECHNICIAN"))
        store = self.registry.technicians
        if len(store) == 0:
            self.echo("There are no registered technicians.")
            self.prompter.pause()
            return None

        tid = self.prompter.read_int_in_range(0, store.max_id(), "ID of the technician to deactivate: ")
        t = store.find(tid)
        if t is None or t.state in ("inactive", "busy"):
            self.echo("Invalid ID.")
            self.log.append("Warning: Attempt to deactivate an unknown, inactive or busy technician.")
            self.prompter.pause()
            return None

        confirm = self.prompter.read_int_in_range(1, 2, f"Deactivate technician {tid}? (1) Yes (2) No\n")
        if confirm != 1:
            self.echo("Operation cancelled.")
            self.prompter.pause()
            return None

        t = store.replace(replace(t, state="inactive"))
        if store.active_count > 0:
            store.active_count -= 1

        self.echo("The technician was deactivated.")
        self.log.append("Info: A technician was deactivated.")
        self.prompter.pause()
        return t
