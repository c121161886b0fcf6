from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..infra.models import (
    ASSET_CATEGORY_VALUES,
    ASSET_STATE_VALUES,
    ORDER_STATE_VALUES,
    Asset,
    Department,
    Order,
    Technician,
)
from ..orders.metrics import average_resolution_seconds, executing_count, occupancy_rate, order_cost
from ..stores import Registry

PRIORITY_WEIGHTS: Dict[str, int] = {"low": 1, "medium": 3, "high": 5}

# Orders (any state) at which an asset is reported as unstable.
UNSTABLE_THRESHOLD = 5

NO_LOCATION = "no location"
NOT_AVAILABLE = "n/a"


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    technician: Technician
    concluded: int


def count_assets_by_state(assets: Iterable[Asset]) -> Dict[str, int]:
    out = {s: 0 for s in ASSET_STATE_VALUES}
    for a in assets:
        out[a.state] = out.get(a.state, 0) + 1
    return out


def count_assets_by_category(assets: Iterable[Asset]) -> Dict[str, int]:
    out = {c: 0 for c in ASSET_CATEGORY_VALUES}
    for a in assets:
        out[a.category] = out.get(a.category, 0) + 1
    return out


def count_orders_by_state(orders: Iterable[Order]) -> Dict[str, int]:
    out = {s: 0 for s in ORDER_STATE_VALUES}
    for o in orders:
        out[o.state] = out.get(o.state, 0) + 1
    return out


def urgency_score(department_id: int, orders: Iterable[Order]) -> int:
    return sum(PRIORITY_WEIGHTS.get(o.priority, 0) for o in orders if o.department_id == department_id)


def most_urgent_department(departments: Sequence[Department], orders: Sequence[Order]) -> Optional[Department]:
    """Department whose orders carry the highest total priority weight.

    Ties keep the earliest department. When every score is 0 the first
    department is returned. None when there are no orders or no departments.
    """
    if not orders or not departments:
        return None
    best = 0
    best_score = 0
    for i, d in enumerate(departments):
        score = urgency_score(d.department_id, orders)
        if score > best_score:
            best_score = score
            best = i
    return departments[best]


def most_urgent_department_name(departments: Sequence[Department], orders: Sequence[Order]) -> str:
    d = most_urgent_department(departments, orders)
    if d is None or d.name is None:
        return NOT_AVAILABLE
    return d.name


def orders_for_asset(asset_id: int, orders: Iterable[Order]) -> int:
    return sum(1 for o in orders if o.asset_id == asset_id)


def unstable_assets(assets: Iterable[Asset], orders: Sequence[Order]) -> List[Tuple[Asset, int]]:
    out: List[Tuple[Asset, int]] = []
    for a in assets:
        n = orders_for_asset(a.asset_id, orders)
        if n >= UNSTABLE_THRESHOLD:
            out.append((a, n))
    return out


def location_incidents(assets: Iterable[Asset], orders: Sequence[Order]) -> List[Tuple[str, int]]:
    """Order counts per exact location string, in first-seen order. Assets without orders are skipped."""
    buckets: Dict[str, int] = {}
    for a in assets:
        n = orders_for_asset(a.asset_id, orders)
        if n == 0:
            continue
        loc = a.location if a.location else NO_LOCATION
        buckets[loc] = buckets.get(loc, 0) + n
    return list(buckets.items())


def technician_ranking(technicians: Iterable[Technician], orders: Sequence[Order]) -> List[RankingEntry]:
    counted = [
        (t, sum(1 for o in orders if o.state == "concluded" and o.technician_id == t.technician_id))
        for t in technicians
    ]
    # sorted() is stable with reverse=True: ties keep storage order.
    counted = sorted(counted, key=lambda pair: pair[1], reverse=True)
    return [RankingEntry(rank=i + 1, technician=t, concluded=n) for i, (t, n) in enumerate(counted)]


def most_corrective_asset(assets: Iterable[Asset]) -> Optional[Asset]:
    best: Optional[Asset] = None
    best_count = 0
    for a in assets:
        if a.corrective_count > best_count:
            best_count = a.corrective_count
            best = a
    return best


def filter_orders(
    orders: Iterable[Order],
    *,
    state: Optional[str] = None,
    priority: Optional[str] = None,
    maintenance_type: Optional[str] = None,
) -> List[Order]:
    out: List[Order] = []
    for o in orders:
        if state is not None and o.state != state:
            continue
        if priority is not None and o.priority != priority:
            continue
        if maintenance_type is not None and o.maintenance_type != maintenance_type:
            continue
        out.append(o)
    return out


def summary(registry: Registry) -> Dict[str, Any]:
    """JSON-serialisable snapshot of every aggregate."""
    assets = registry.assets.records()
    departments = registry.departments.records()
    technicians = registry.technicians.records()
    orders = registry.orders.records()
    materials = registry.materials.records()

    top = most_corrective_asset(assets)
    return {
        "assets": {
            "total": len(assets),
            "available": registry.assets.available,
            "by_state": count_assets_by_state(assets),
            "by_category": count_assets_by_category(assets),
            "most_corrective": (
                {"asset_id": top.asset_id, "name": top.name, "corrective_count": top.corrective_count}
                if top is not None
                else NOT_AVAILABLE
            ),
        },
        "departments": {
            "total": len(departments),
            "active": registry.departments.active_count,
            "inactive": len(departments) - registry.departments.active_count,
            "most_urgent": most_urgent_department_name(departments, orders),
        },
        "technicians": {
            "total": len(technicians),
            "active": registry.technicians.active_count,
            "occupancy": {
                str(t.technician_id): {
                    "executing": executing_count(t.technician_id, orders),
                    "rate": occupancy_rate(t.technician_id, orders),
                }
                for t in technicians
            },
            "ranking": [
                {"rank": e.rank, "technician_id": e.technician.technician_id, "name": e.technician.name, "concluded": e.concluded}
                for e in technician_ranking(technicians, orders)
            ],
        },
        "orders": {
            "total": len(orders),
            "by_state": count_orders_by_state(orders),
            "costs": {str(o.order_id): order_cost(o.order_id, materials) for o in orders},
            "average_resolution_seconds": average_resolution_seconds(orders),
        },
        "unstable_assets": [
            {"asset_id": a.asset_id, "name": a.name, "orders": n} for a, n in unstable_assets(assets, orders)
        ],
        "locations": [{"location": loc, "orders": n} for loc, n in location_incidents(assets, orders)],
    }
