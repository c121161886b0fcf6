from __future__ import annotations

from dataclasses import dataclass, field

from .base import GROWTH_STEP, NOT_FOUND, GrowableCollection, RecordStore
from .entities import AssetStore, DepartmentStore, MaterialStore, OrderStore, TechnicianStore


@dataclass
class Registry:
    """The in-memory snapshot of every collection, owned by one session."""

    departments: DepartmentStore = field(default_factory=DepartmentStore)
    assets: AssetStore = field(default_factory=AssetStore)
    technicians: TechnicianStore = field(default_factory=TechnicianStore)
    orders: OrderStore = field(default_factory=OrderStore)
    materials: MaterialStore = field(default_factory=MaterialStore)


__all__ = [
    "GROWTH_STEP",
    "NOT_FOUND",
    "AssetStore",
    "DepartmentStore",
    "GrowableCollection",
    "MaterialStore",
    "OrderStore",
    "RecordStore",
    "Registry",
    "TechnicianStore",
]
