"""Plain-text renderings of records and reports.

Every function returns a list of lines; printing is left to the caller.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..common.labels import (
    ASSET_CATEGORY_LABELS,
    ASSET_STATE_LABELS,
    DEPARTMENT_STATE_LABELS,
    MAINTENANCE_TYPE_LABELS,
    ORDER_STATE_LABELS,
    PRIORITY_LABELS,
    TECHNICIAN_SPECIALTY_LABELS,
    TECHNICIAN_STATE_LABELS,
    label,
)
from ..infra.models import (
    ASSET_CATEGORY_VALUES,
    ASSET_STATE_VALUES,
    MAINTENANCE_TYPE_VALUES,
    ORDER_STATE_VALUES,
    PRIORITY_VALUES,
    TECHNICIAN_SPECIALTY_VALUES,
    Asset,
    Department,
    Material,
    Order,
    Technician,
)
from ..orders.metrics import average_resolution_seconds, occupancy_rate, order_cost
from ..stores import Registry
from . import aggregates as agg

NO_NAME = "(no name)"


def heading(title: str) -> str:
    return f"\n===== {title} ====="


def _text(value: Optional[str], fallback: str = NO_NAME) -> str:
    return value if value is not None else fallback


def asset_lines(a: Asset) -> List[str]:
    out = [
        f"ID: {a.asset_id}",
        f"Name: {_text(a.name)}",
        f"Category: {label(ASSET_CATEGORY_LABELS, a.category)}",
        f"State: {label(ASSET_STATE_LABELS, a.state)}",
        f"Location: {_text(a.location, agg.NO_LOCATION)}",
        f"Acquired on: {a.acquired_on if a.acquired_on is not None else agg.NOT_AVAILABLE}",
    ]
    if a.state == "decommissioned" and a.decommissioned_on is not None:
        out.append(f"Decommissioned on: {a.decommissioned_on}")
    return out


def asset_listing(assets: Sequence[Asset]) -> List[str]:
    out = [heading("ASSETS")]
    if not assets:
        out.append("There are no registered assets.")
        return out
    for a in assets:
        out.extend(asset_lines(a))
        out.append("")
    return out


def assets_by_department(departments: Sequence[Department], assets: Sequence[Asset]) -> List[str]:
    out: List[str] = []
    for d in departments:
        out.append(f"===== {_text(d.name)} =====")
        for a in assets:
            if a.department_id == d.department_id:
                out.extend(asset_lines(a))
                out.append("")
    return out


def department_lines(d: Department) -> List[str]:
    return [
        f"Department name: {_text(d.name)}",
        f"ID: {d.department_id}",
        f"Responsible: {_text(d.responsible)}",
        f"Contact: {_text(d.contact, agg.NOT_AVAILABLE)}",
        f"State: {label(DEPARTMENT_STATE_LABELS, d.state)}",
    ]


def department_listing(departments: Sequence[Department]) -> List[str]:
    out = [heading("DEPARTMENTS")]
    if not departments:
        out.append("There are no registered departments.")
        return out
    for d in departments:
        out.append("")
        out.extend(department_lines(d))
    return out


def technician_lines(t: Technician, orders: Optional[Sequence[Order]] = None) -> List[str]:
    out = [
        f"ID: {t.technician_id}",
        f"Name: {_text(t.name)}",
        f"Specialty: {label(TECHNICIAN_SPECIALTY_LABELS, t.specialty)}",
        f"State: {label(TECHNICIAN_STATE_LABELS, t.state)}",
    ]
    if orders is not None:
        out.append(f"Occupancy rate: {occupancy_rate(t.technician_id, orders)}%")
    return out


def technician_listing(technicians: Sequence[Technician], orders: Optional[Sequence[Order]] = None) -> List[str]:
    out = [heading("TECHNICIANS")]
    if not technicians:
        out.append("There are no registered technicians.")
        return out
    for t in technicians:
        out.extend(technician_lines(t, orders))
        out.append("")
    return out


def order_lines(o: Order, materials: Optional[Iterable[Material]] = None) -> List[str]:
    out = [
        f"Order ID: {o.order_id}",
        f"Asset ID: {o.asset_id}",
        f"Department ID: {o.department_id}",
    ]
    if o.technician_id is not None:
        out.append(f"Technician ID: {o.technician_id}")
    out.extend(
        [
            f"State: {label(ORDER_STATE_LABELS, o.state)}",
            f"Priority: {label(PRIORITY_LABELS, o.priority)}",
            f"Maintenance type: {label(MAINTENANCE_TYPE_LABELS, o.maintenance_type)}",
        ]
    )
    if o.started_at is not None:
        out.append(f"Started at: {o.started_at}")
    if o.ended_at is not None:
        out.append(f"Ended at: {o.ended_at}")
    if materials is not None:
        out.append(f"Associated cost: {order_cost(o.order_id, materials):.2f}")
    return out


def _order_block(title: str, orders: Sequence[Order], materials: Optional[Sequence[Material]]) -> List[str]:
    out = [heading(title)]
    if not orders:
        out.append("No orders.")
    for o in orders:
        out.extend(order_lines(o, materials))
        out.append("")
    return out


def pending_orders(registry: Registry) -> List[str]:
    pending = agg.filter_orders(registry.orders, state="pending")
    if not pending:
        return ["There are no pending orders."]
    out: List[str] = []
    for o in pending:
        out.extend(order_lines(o))
        out.append("")
    return out


def all_orders(registry: Registry) -> List[str]:
    orders = registry.orders.records()
    if not orders:
        return ["There are no registered orders."]
    out: List[str] = []
    for o in orders:
        out.extend(order_lines(o))
        out.append("")
    return out


def asset_report(registry: Registry) -> List[str]:
    assets = registry.assets.records()
    by_state = agg.count_assets_by_state(assets)
    by_category = agg.count_assets_by_category(assets)
    out = [
        heading("ASSET REPORT"),
        f"Total assets: {len(assets)}",
        f"Available assets: {registry.assets.available}",
    ]
    out.extend(f"{label(ASSET_STATE_LABELS, s)}: {by_state[s]}" for s in ASSET_STATE_VALUES)
    out.extend(f"{label(ASSET_CATEGORY_LABELS, c)}: {by_category[c]}" for c in ASSET_CATEGORY_VALUES)
    top = agg.most_corrective_asset(assets)
    if top is None:
        out.append(f"Asset with most corrective maintenance: {agg.NOT_AVAILABLE} Corrections: {agg.NOT_AVAILABLE}")
    else:
        out.append(f"Asset with most corrective maintenance: {_text(top.name)} Corrections: {top.corrective_count}")
    return out


def department_report(registry: Registry) -> List[str]:
    departments = registry.departments.records()
    active = registry.departments.active_count
    out = [
        heading("DEPARTMENT REPORT"),
        f"Total departments: {len(departments)}",
        f"Active departments: {active}",
        f"Inactive departments: {len(departments) - active}",
    ]
    out.extend(assets_by_department(departments, registry.assets.records()))
    out.append(
        f"Department with the most urgent requests: {agg.most_urgent_department_name(departments, registry.orders.records())}"
    )
    return out


def technician_report(registry: Registry) -> List[str]:
    technicians = registry.technicians.records()
    orders = registry.orders.records()
    out = [heading("ACTIVE TECHNICIANS")]
    for t in technicians:
        if t.state == "active":
            out.extend(technician_lines(t, orders))
            out.append("")
    out.append(heading("BUSY TECHNICIANS"))
    for t in technicians:
        if t.state == "busy":
            out.extend(technician_lines(t, orders))
            out.append("")
    for spec in TECHNICIAN_SPECIALTY_VALUES:
        out.append(heading(f"TECHNICIANS: {label(TECHNICIAN_SPECIALTY_LABELS, spec).upper()}"))
        for t in technicians:
            if t.specialty == spec:
                out.extend(technician_lines(t, orders))
                out.append("")
    out.append(heading("PERFORMANCE RANKING"))
    for e in agg.technician_ranking(technicians, orders):
        out.append(f"{e.rank}. {_text(e.technician.name)} - {e.concluded} concluded orders")
    return out


def order_report(registry: Registry) -> List[str]:
    orders = registry.orders.records()
    materials = registry.materials.records()
    out: List[str] = []
    for p in PRIORITY_VALUES:
        title = f"{label(PRIORITY_LABELS, p).upper()} PRIORITY ORDERS"
        out.extend(_order_block(title, agg.filter_orders(orders, priority=p), materials))
    for s in ORDER_STATE_VALUES:
        title = f"{label(ORDER_STATE_LABELS, s).upper()} ORDERS"
        out.extend(_order_block(title, agg.filter_orders(orders, state=s), materials))
    for m in MAINTENANCE_TYPE_VALUES:
        title = f"{label(MAINTENANCE_TYPE_LABELS, m).upper()} ORDERS"
        out.extend(_order_block(title, agg.filter_orders(orders, maintenance_type=m), materials))
    out.append(f"Average resolution time: {average_resolution_seconds(orders):.2f} seconds")
    return out


def unstable_report(registry: Registry) -> List[str]:
    out = [heading("ALERT: UNSTABLE ASSETS")]
    if len(registry.assets) == 0:
        out.append("There are no registered assets.")
        return out
    if len(registry.orders) == 0:
        out.append("There are no registered orders.")
        return out
    found = agg.unstable_assets(registry.assets, registry.orders.records())
    if not found:
        out.append(f"There are no unstable assets ({agg.UNSTABLE_THRESHOLD} or more orders).")
        return out
    for a, n in found:
        out.append(f"{_text(a.name)} (ID {a.asset_id}) - {n} orders registered!")
    return out


def location_report(registry: Registry) -> List[str]:
    out = [heading("INCIDENTS BY LOCATION")]
    if len(registry.assets) == 0:
        out.append("There are no registered assets.")
        return out
    if len(registry.orders) == 0:
        out.append("There are no registered orders.")
        return out
    buckets = agg.location_incidents(registry.assets, registry.orders.records())
    if not buckets:
        out.append("No incidents are associated with any location.")
        return out
    for loc, n in buckets:
        out.append(f"Location: {loc} - {n} orders")
    return out


def summary_report(registry: Registry) -> List[str]:
    out: List[str] = []
    for section in (asset_report, department_report, technician_report, order_report, unstable_report, location_report):
        out.extend(section(registry))
    return out
