from __future__ import annotations

from typing import Any, Callable, List, Optional

from ..infra.contracts import LogSink, Prompter
from ..infra.errors import MaintrackError, TechnicianUnavailableError
from ..infra.models import MAINTENANCE_TYPE_VALUES, PRIORITY_VALUES, Order
from ..reporting import render
from ..stores import Registry
from ..utils.time import Clock, local_now
from .lifecycle import (
    AdvanceRequest,
    MaterialDraft,
    TransitionResult,
    advance,
    apply_transition,
    check_technician,
    open_order,
)

# Upper bound accepted when asking for an asset identifier.
MAX_ASSET_ID = 999999

_UNAVAILABLE_MESSAGES = {
    "not_found": "The technician ID is invalid, try again.",
    "inactive": "The selected technician is inactive, try again.",
    "at_capacity": "The selected technician already has 5 maintenance orders in execution, choose another one.",
}


class OrderService:
    """Interactive create/manage flows around the order lifecycle engine.

    Engine errors are turned into console messages and log entries; nothing
    raised by the engine escapes ``create_order`` or ``manage_order``.
    """

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

    def _echo_lines(self, lines: List[str]) -> None:
        for line in lines:
            self.echo(line)

    def _apply(self, result: TransitionResult) -> None:
        apply_transition(result, self.registry)
        self.echo(result.message)

    def create_order(self) -> Optional[Order]:
        self.echo(render.heading("REGISTER MAINTENANCE"))
        self._echo_lines(render.assets_by_department(self.registry.departments.records(), self.registry.assets.records()))

        if self.registry.assets.operational_count() == 0:
            self.echo("There are no assets available to send to maintenance.")
            self.log.append("Warning: Attempt to create an order with no operational assets.")
            self.prompter.pause()
            return None

        while True:
            asset_id = self.prompter.read_int_in_range(0, MAX_ASSET_ID, "Enter the ID of the asset to send to maintenance: ")
            asset = self.registry.assets.find(asset_id)
            if asset is not None and asset.state == "operational":
                break
            self.echo("The ID entered is invalid. Try again.")

        p = self.prompter.read_int_in_range(1, 3, "Order priority:\n1 - Low\n2 - Medium\n3 - High\n")
        t = self.prompter.read_int_in_range(1, 2, "Maintenance type:\n1 - Preventive\n2 - Corrective\n")

        try:
            result = open_order(asset_id, PRIORITY_VALUES[p - 1], MAINTENANCE_TYPE_VALUES[t - 1], self.registry)
        except MaintrackError as e:
            self.echo(f"The order could not be created: {e}")
            self.log.append(f"Error: Order creation failed for asset {asset_id}: {e}")
            self.prompter.pause()
            return None

        self._apply(result)
        self.log.append("Info: A new order was created and an asset was sent to maintenance.")
        self.prompter.pause()
        return result.order

    def _has_eligible_technician(self) -> bool:
        for t in self.registry.technicians:
            try:
                check_technician(t.technician_id, self.registry)
            except TechnicianUnavailableError:
                continue
            return True
        return False

    def _choose_technician(self) -> int:
        max_id = self.registry.technicians.max_id()
        while True:
            tid = self.prompter.read_int_in_range(0, max_id, "Enter the ID of the technician to assign to this order: ")
            try:
                check_technician(tid, self.registry)
            except TechnicianUnavailableError as e:
                self.echo(_UNAVAILABLE_MESSAGES.get(e.reason, str(e)))
                continue
            return tid

    def _read_materials(self) -> List[MaterialDraft]:
        drafts: List[MaterialDraft] = []
        while True:
            name = self.prompter.read_dynamic_string("Material name: ")
            unit_cost = self.prompter.read_positive_float("Unit cost: ")
            quantity = self.prompter.read_positive_int("Quantity: ")
            drafts.append(MaterialDraft(name=name, unit_cost=unit_cost, quantity=quantity))
            again = self.prompter.read_int_in_range(1, 2, "Add another material? (1) Yes (2) No\n")
            if again != 1:
                return drafts

    def _reject_lookup(self, order_id: int) -> None:
        stored = self.registry.orders.find_any(order_id)
        if stored is not None and stored.state == "concluded":
            self.echo("The selected order was already concluded.")
        elif stored is not None and stored.state == "cancelled":
            self.echo("The selected order was already cancelled.")
        else:
            self.echo("Invalid order (not found or not pending/in execution).")
        self.log.append("Warning: Attempt to manage an invalid order (not found or incompatible state).")

    def manage_order(self) -> Optional[TransitionResult]:
        if len(self.registry.orders) == 0:
            self.echo("There are no registered orders.")
            self.prompter.pause()
            return None

        order_id = self.prompter.read_int_in_range(0, self.registry.orders.max_id(), "Enter the ID of the order to manage: ")
        order = self.registry.orders.find(order_id)
        if order is None:
            self._reject_lookup(order_id)
            self.prompter.pause()
            return None

        if order.state == "pending":
            if not self._has_eligible_technician():
                self.echo("No technician is available to take this order.")
                self.log.append("Warning: No eligible technician to start an order.")
                self.prompter.pause()
                return None
            request = AdvanceRequest(technician_id=self._choose_technician(), materials=tuple(self._read_materials()))
            done = "Info: A maintenance order moved to IN EXECUTION."
        else:
            choice = self.prompter.read_int_in_range(1, 2, "Choose an operation:\n1 - Cancel maintenance\n2 - Conclude maintenance\n")
            request = AdvanceRequest(outcome="cancel" if choice == 1 else "conclude")
            done = "Info: A maintenance order was cancelled." if choice == 1 else "Info: A maintenance order was concluded."

        try:
            result = advance(order, request, self.registry, self.clock)
        except MaintrackError as e:
            self.echo(f"The order could not be updated: {e}")
            self.log.append(f"Error: Order {order.order_id} could not advance: {e}")
            self.prompter.pause()
            return None

        self._apply(result)
        for _ in result.materials:
            self.log.append("Info: A material was added to a maintenance order.")
        self.log.append(done)
        self.prompter.pause()
        return result

    def list_pending(self) -> None:
        self._echo_lines(render.pending_orders(self.registry))
        self.prompter.pause()

    def list_all(self) -> None:
        self._echo_lines(render.all_orders(self.registry))
        self.prompter.pause()
