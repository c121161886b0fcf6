"""Maintenance order state machine.

    pending --(technician + materials)--> execution --cancel--> cancelled
                                                    --conclude--> concluded

Every transition is computed by a pure function that returns a
``TransitionResult`` describing all records to write back. Nothing touches the
registry until ``apply_transition`` writes the whole result.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Optional, Tuple

from ..infra.errors import (
    ConflictError,
    NotFoundError,
    OrderClosedError,
    TechnicianUnavailableError,
    TransitionError,
    ValidationError,
)
from ..infra.models import (
    MAINTENANCE_TYPE_VALUES,
    PRIORITY_VALUES,
    Asset,
    Material,
    Order,
    Technician,
    is_valid_value,
)
from ..stores import Registry
from ..utils.time import Clock, local_now, now_stamp
from .metrics import OCCUPANCY_CAP, executing_count, order_cost

Outcome = Literal["cancel", "conclude"]
OUTCOME_VALUES: Tuple[str, ...] = ("cancel", "conclude")


@dataclass(frozen=True)
class MaterialDraft:
    name: Optional[str]
    unit_cost: float
    quantity: int


@dataclass(frozen=True)
class AdvanceRequest:
    """Caller input for ``advance``.

    A pending order needs ``technician_id`` and at least one material; an
    order in execution needs ``outcome``.
    """

    technician_id: Optional[int] = None
    materials: Tuple[MaterialDraft, ...] = ()
    outcome: Optional[Outcome] = None


@dataclass(frozen=True)
class TransitionResult:
    order: Order
    asset: Optional[Asset] = None
    technician: Optional[Technician] = None
    materials: Tuple[Material, ...] = ()
    availability_delta: int = 0
    message: str = ""


def open_order(asset_id: int, priority: str, maintenance_type: str, registry: Registry) -> TransitionResult:
    """Create a pending order for an operational asset and take the asset out of service."""
    if not is_valid_value(priority, PRIORITY_VALUES):
        raise ValidationError(f"invalid priority {priority!r} (allowed: {list(PRIORITY_VALUES)})")
    if not is_valid_value(maintenance_type, MAINTENANCE_TYPE_VALUES):
        raise ValidationError(f"invalid maintenance type {maintenance_type!r} (allowed: {list(MAINTENANCE_TYPE_VALUES)})")

    asset = registry.assets.find(asset_id)
    if asset is None:
        raise NotFoundError(f"asset {asset_id} not found")
    if asset.state != "operational":
        raise ConflictError(f"asset {asset_id} is not operational ({asset.state})")

    order = Order(
        order_id=registry.orders.next_id(),
        asset_id=asset.asset_id,
        department_id=asset.department_id,
        priority=priority,
        maintenance_type=maintenance_type,
    )
    return TransitionResult(
        order=order,
        asset=replace(asset, state="in_maintenance"),
        availability_delta=-1,
        message="Order registered.",
    )


def check_technician(technician_id: int, registry: Registry) -> Technician:
    tech = registry.technicians.find(technician_id)
    if tech is None:
        raise TechnicianUnavailableError(technician_id, "not_found")
    if tech.state == "inactive":
        raise TechnicianUnavailableError(technician_id, "inactive")
    if executing_count(technician_id, registry.orders) >= OCCUPANCY_CAP:
        raise TechnicianUnavailableError(technician_id, "at_capacity")
    return tech


def _start(order: Order, request: AdvanceRequest, registry: Registry, clock: Clock) -> TransitionResult:
    if request.technician_id is None:
        raise ValidationError(f"order {order.order_id} needs a technician to start")
    if not request.materials:
        raise ValidationError(f"order {order.order_id} needs at least one material to start")
    tech = check_technician(request.technician_id, registry)

    materials = tuple(
        Material(order_id=order.order_id, name=d.name, unit_cost=float(d.unit_cost), quantity=int(d.quantity))
        for d in request.materials
    )
    started = replace(order, state="execution", technician_id=tech.technician_id, started_at=now_stamp(clock))
    return TransitionResult(
        order=started,
        technician=replace(tech, state="busy", order_id=order.order_id),
        materials=materials,
        message="Maintenance started.",
    )


def _finish(order: Order, outcome: str, registry: Registry, clock: Clock) -> TransitionResult:
    if outcome not in OUTCOME_VALUES:
        raise ValidationError(f"invalid outcome {outcome!r} (allowed: {list(OUTCOME_VALUES)})")

    new_state = "cancelled" if outcome == "cancel" else "concluded"
    finished = replace(order, state=new_state, ended_at=now_stamp(clock))

    asset = registry.assets.find(order.asset_id)
    delta = 0
    if asset is not None:
        asset = replace(asset, state="operational")
        delta = 1
        if new_state == "concluded" and order.maintenance_type == "corrective":
            asset = replace(
                asset,
                corrective_count=asset.corrective_count + 1,
                accrued_cost=asset.accrued_cost + order_cost(order.order_id, registry.materials),
            )

    # A cancelled order leaves its technician as it was.
    tech = None
    if new_state == "concluded" and order.technician_id is not None:
        tech = registry.technicians.find(order.technician_id)
        if tech is not None:
            tech = replace(tech, state="active")

    message = "Maintenance cancelled." if new_state == "cancelled" else "Maintenance concluded."
    return TransitionResult(order=finished, asset=asset, technician=tech, availability_delta=delta, message=message)


def advance(order: Order, request: AdvanceRequest, registry: Registry, clock: Clock = local_now) -> TransitionResult:
    """Compute the next state of ``order`` and its side effects without applying them."""
    if order.is_terminal:
        raise OrderClosedError(order.order_id, order.state)
    if order.state == "pending":
        return _start(order, request, registry, clock)
    if order.state == "execution":
        if request.outcome is None:
            raise ValidationError(f"order {order.order_id} in execution needs an outcome")
        return _finish(order, request.outcome, registry, clock)
    raise TransitionError(f"order {order.order_id} has unknown state {order.state!r}")


def apply_transition(result: TransitionResult, registry: Registry) -> None:
    """Write every record of ``result`` back to the registry."""
    if registry.orders.find_any(result.order.order_id) is None:
        registry.orders.add(result.order)
    else:
        registry.orders.replace(result.order)
    if result.asset is not None:
        registry.assets.replace(result.asset)
    if result.technician is not None:
        registry.technicians.replace(result.technician)
    for m in result.materials:
        registry.materials.add(m)
    if result.availability_delta:
        registry.assets.adjust_available(result.availability_delta)
