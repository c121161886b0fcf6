from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from ..catalog import AssetCatalog, DepartmentCatalog, TechnicianCatalog
from ..infra.contracts import LogSink, Prompter
from ..orders.service import OrderService
from ..reporting import render
from ..stores import Registry
from ..utils.time import Clock, local_now

Action = Callable[[], Any]

MAIN_OPTIONS = (
    "1 - Manage assets",
    "2 - Manage departments",
    "3 - Manage technicians",
    "4 - Manage maintenance",
    "5 - Reports and logs",
    "6 - Exit",
)
EXIT_OPTION = 6


class MainMenu:
    """Interactive main loop. Every submenu ends with a "Back" option."""

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
        self.assets = AssetCatalog(registry, prompter, log, echo=echo, clock=clock)
        self.departments = DepartmentCatalog(registry, prompter, log, echo=echo)
        self.technicians = TechnicianCatalog(registry, prompter, log, echo=echo)
        self.orders = OrderService(registry, prompter, log, echo=echo, clock=clock)

    def _submenus(self) -> Dict[int, Tuple[str, List[Tuple[str, Action]]]]:
        return {
            1: (
                "MANAGE ASSETS",
                [
                    ("Add asset", self.assets.create),
                    ("List all assets", self.assets.list),
                    ("List assets by department", self.assets.list_by_department),
                    ("Decommission asset", self.assets.decommission),
                    ("Search assets", self.assets.search),
                ],
            ),
            2: (
                "MANAGE DEPARTMENTS",
                [
                    ("Create department", self.departments.create),
                    ("List departments", self.departments.list),
                    ("Update department", self.departments.update),
                    ("Deactivate department", self.departments.deactivate),
                ],
            ),
            3: (
                "MANAGE TECHNICIANS",
                [
                    ("Add technician", self.technicians.create),
                    ("List technicians", self.technicians.list),
                    ("Deactivate technician", self.technicians.deactivate),
                ],
            ),
            4: (
                "MANAGE MAINTENANCE",
                [
                    ("Create maintenance order", self.orders.create_order),
                    ("Manage maintenance order", self.orders.manage_order),
                    ("List pending orders", self.orders.list_pending),
                    ("List all orders", self.orders.list_all),
                ],
            ),
            5: (
                "REPORTS",
                [
                    ("View logs", self.show_logs),
                    ("Asset report", self._report(render.asset_report)),
                    ("Department report", self._report(render.department_report)),
                    ("Technician report", self._report(render.technician_report)),
                    ("Order report", self._report(render.order_report)),
                    ("Unstable assets report", self._report(render.unstable_report)),
                    ("Incidents by location report", self._report(render.location_report)),
                ],
            ),
        }

    def _report(self, fn: Callable[[Registry], List[str]]) -> Action:
        def show() -> None:
            for line in fn(self.registry):
                self.echo(line)
            self.prompter.pause()

        return show

    def show_logs(self) -> None:
        self.echo(render.heading("LOGS"))
        lines = self.log.read_lines()
        if not lines:
            self.echo("The log is empty.")
        for line in lines:
            self.echo(line)
        self.prompter.pause()

    def _run_submenu(self, title: str, entries: List[Tuple[str, Action]]) -> None:
        self.echo(render.heading(title))
        for i, (text, _) in enumerate(entries, start=1):
            self.echo(f"{i} - {text}")
        back = len(entries) + 1
        self.echo(f"{back} - Back")
        choice = self.prompter.read_int_in_range(1, back, "Choose an option: ")
        if choice == back:
            return
        entries[choice - 1][1]()

    def run(self) -> None:
        """Loop until the operator picks Exit. EOFError from the prompter propagates."""
        submenus = self._submenus()
        while True:
            self.echo(render.heading("MENU"))
            for line in MAIN_OPTIONS:
                self.echo(line)
            choice = self.prompter.read_int_in_range(1, EXIT_OPTION, "Choose a menu: ")
            if choice == EXIT_OPTION:
                self.echo("Goodbye.")
                return
            title, entries = submenus[choice]
            self._run_submenu(title, entries)
