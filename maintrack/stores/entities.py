from __future__ import annotations

from typing import Iterable, List, Optional

from ..infra.models import (
    OPEN_ORDER_STATES,
    Asset,
    Department,
    Material,
    Order,
    Technician,
)
from .base import GrowableCollection, RecordStore


class DepartmentStore(RecordStore[Department]):
    """Departments. No state filter on lookup; ``active_count`` is a running counter."""

    id_field = "department_id"

    def __init__(self, records: Iterable[Department] = (), active_count: Optional[int] = None) -> None:
        super().__init__(records)
        if active_count is None:
            active_count = sum(1 for d in self._records if d.state == "active")
        self.active_count = int(active_count)

    def is_active(self, department_id: int) -> bool:
        d = self.find(department_id)
        return d is not None and d.state == "active"

    def active(self) -> List[Department]:
        return [d for d in self._records if d.state == "active"]


class AssetStore(RecordStore[Asset]):
    """Assets. Lookups skip decommissioned assets.

    ``available`` counts assets eligible for a new maintenance order. It is a
    running counter adjusted by the operations that move assets in and out of
    the Operational state, and it is persisted with the collection.
    """

    id_field = "asset_id"

    def __init__(self, records: Iterable[Asset] = (), available: Optional[int] = None) -> None:
        super().__init__(records)
        if available is None:
            available = self.operational_count()
        self.available = int(available)

    def is_visible(self, record: Asset) -> bool:
        return record.state != "decommissioned"

    def operational_count(self) -> int:
        return sum(1 for a in self._records if a.state == "operational")

    def in_department(self, department_id: int) -> List[Asset]:
        return [a for a in self._records if a.department_id == department_id]

    def adjust_available(self, delta: int) -> None:
        self.available += int(delta)


class TechnicianStore(RecordStore[Technician]):
    """Technicians. No state filter on lookup: callers check ``state`` themselves."""

    id_field = "technician_id"

    def __init__(self, records: Iterable[Technician] = (), active_count: Optional[int] = None) -> None:
        super().__init__(records)
        if active_count is None:
            active_count = sum(1 for t in self._records if t.state != "inactive")
        self.active_count = int(active_count)


class OrderStore(RecordStore[Order]):
    """Work orders. Lookups only see open (pending or in-execution) orders."""

    id_field = "order_id"

    def is_visible(self, record: Order) -> bool:
        return record.state in OPEN_ORDER_STATES

    def for_asset(self, asset_id: int) -> List[Order]:
        return [o for o in self._records if o.asset_id == asset_id]

    def for_technician(self, technician_id: int) -> List[Order]:
        return [o for o in self._records if o.technician_id == technician_id]

    def in_state(self, state: str) -> List[Order]:
        return [o for o in self._records if o.state == state]


class MaterialStore(GrowableCollection[Material]):
    """Append-only materials; an order's materials are found by scanning ``order_id``."""

    def for_order(self, order_id: int) -> List[Material]:
        return [m for m in self._records if m.order_id == order_id]
