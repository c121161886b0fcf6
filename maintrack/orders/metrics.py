from __future__ import annotations

from typing import Iterable, Optional

from ..infra.models import Material, Order

# Maximum simultaneous in-execution orders per technician.
OCCUPANCY_CAP = 5


def order_cost(order_id: int, materials: Iterable[Material]) -> float:
    """Sum of unit cost x quantity over the materials attached to ``order_id``."""
    return sum((m.total for m in materials if m.order_id == order_id), 0.0)


def executing_count(technician_id: int, orders: Iterable[Order]) -> int:
    return sum(1 for o in orders if o.state == "execution" and o.technician_id == technician_id)


def occupancy_rate(technician_id: int, orders: Iterable[Order]) -> int:
    """Percentage of the occupancy cap in use, truncated: 0-4 orders give 0, 5 give 100."""
    return (executing_count(technician_id, orders) // OCCUPANCY_CAP) * 100


def resolution_seconds(order: Order) -> Optional[int]:
    """Seconds from start to end, or None when the order cannot be measured.

    Unset stamps, a zero year, invalid calendar values and negative spans all
    give None.
    """
    if order.started_at is None or order.ended_at is None:
        return None
    if not order.started_at.is_set() or not order.ended_at.is_set():
        return None
    try:
        start = order.started_at.to_datetime()
        end = order.ended_at.to_datetime()
    except ValueError:
        return None
    delta = int((end - start).total_seconds())
    if delta < 0:
        return None
    return delta


def average_resolution_seconds(orders: Iterable[Order]) -> float:
    """Average resolution time over concluded orders that can be measured; 0 when none can."""
    total = 0
    counted = 0
    for o in orders:
        if o.state != "concluded":
            continue
        secs = resolution_seconds(o)
        if secs is None:
            continue
        total += secs
        counted += 1
    if counted == 0:
        return 0.0
    return total / counted
