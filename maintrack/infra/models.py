from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, Optional, Tuple

# Canonical value sets shared by stores, codecs, the order engine and reports.
# Each Literal has a matching *_VALUES tuple that is the single source of truth
# for validation.
AssetCategory = Literal["vehicle", "it_equipment", "furniture", "tool", "other"]
ASSET_CATEGORY_VALUES: Tuple[str, ...] = ("vehicle", "it_equipment", "furniture", "tool", "other")

AssetState = Literal["operational", "in_maintenance", "decommissioned", "inactive"]
ASSET_STATE_VALUES: Tuple[str, ...] = ("operational", "in_maintenance", "decommissioned", "inactive")

DepartmentState = Literal["active", "inactive"]
DEPARTMENT_STATE_VALUES: Tuple[str, ...] = ("active", "inactive")

TechnicianSpecialty = Literal["it", "mechanic", "electrician", "general_maintenance", "other"]
TECHNICIAN_SPECIALTY_VALUES: Tuple[str, ...] = ("it", "mechanic", "electrician", "general_maintenance", "other")

TechnicianState = Literal["active", "busy", "inactive"]
TECHNICIAN_STATE_VALUES: Tuple[str, ...] = ("active", "busy", "inactive")

OrderState = Literal["pending", "execution", "concluded", "cancelled"]
ORDER_STATE_VALUES: Tuple[str, ...] = ("pending", "execution", "concluded", "cancelled")
OPEN_ORDER_STATES: Tuple[str, ...] = ("pending", "execution")
TERMINAL_ORDER_STATES: Tuple[str, ...] = ("concluded", "cancelled")

Priority = Literal["low", "medium", "high"]
PRIORITY_VALUES: Tuple[str, ...] = ("low", "medium", "high")

MaintenanceType = Literal["preventive", "corrective"]
MAINTENANCE_TYPE_VALUES: Tuple[str, ...] = ("preventive", "corrective")

# Identifier handed out by an empty collection.
FIRST_ID = 10


def is_valid_value(value: Any, allowed: Tuple[str, ...]) -> bool:
    return str(value or "").strip() in allowed


@dataclass(frozen=True)
class CalendarDate:
    """Day/month/year triple used for acquisition and decommission dates."""

    day: int
    month: int
    year: int

    @classmethod
    def from_date(cls, d: date) -> "CalendarDate":
        return cls(day=d.day, month=d.month, year=d.year)

    def is_set(self) -> bool:
        return self.year != 0

    def __str__(self) -> str:
        return f"{self.day}/{self.month}/{self.year}"


@dataclass(frozen=True)
class Stamp:
    """Wall-clock timestamp with second resolution (local time, no zone)."""

    day: int
    month: int
    year: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Stamp":
        return cls(day=dt.day, month=dt.month, year=dt.year, hour=dt.hour, minute=dt.minute, second=dt.second)

    def to_datetime(self) -> datetime:
        """Raises ValueError when the fields do not form a valid calendar time."""
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    def is_set(self) -> bool:
        return self.year != 0

    def __str__(self) -> str:
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d} {self.hour:02d}:{self.minute:02d}:{self.second:02d}"


@dataclass(frozen=True)
class Department:
    department_id: int
    name: Optional[str]
    responsible: Optional[str] = None
    # Either a 9-digit phone number or an email address; only the raw string is kept.
    contact: Optional[str] = None
    state: DepartmentState = "active"


@dataclass(frozen=True)
class Asset:
    """An organizational asset.

    ``department_id`` is validated against the active departments once, at
    creation time. A decommissioned asset stays in storage for reporting but is
    invisible to identifier lookups.
    """

    asset_id: int
    name: Optional[str]
    category: AssetCategory
    department_id: int
    location: Optional[str] = None
    unit_cost: float = 0.0
    acquired_on: Optional[CalendarDate] = None
    decommissioned_on: Optional[CalendarDate] = None
    state: AssetState = "operational"
    corrective_count: int = 0
    accrued_cost: float = 0.0


@dataclass(frozen=True)
class Technician:
    technician_id: int
    name: Optional[str]
    specialty: TechnicianSpecialty
    state: TechnicianState = "active"
    # Last order the technician was assigned to, if any.
    order_id: Optional[int] = None


@dataclass(frozen=True)
class Order:
    """Maintenance work order.

    Invariants kept by the lifecycle engine:
      - state == "pending" exactly when started_at is None
      - ended_at is set exactly when state is terminal (concluded/cancelled)
      - department_id is copied from the asset at creation and never re-derived
    """

    order_id: int
    asset_id: int
    department_id: int
    priority: Priority
    maintenance_type: MaintenanceType
    state: OrderState = "pending"
    technician_id: Optional[int] = None
    started_at: Optional[Stamp] = None
    ended_at: Optional[Stamp] = None

    @property
    def is_open(self) -> bool:
        return self.state in OPEN_ORDER_STATES

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_ORDER_STATES


@dataclass(frozen=True)
class Material:
    """Material consumed by an order. ``order_id`` is not checked against the orders."""

    order_id: int
    name: Optional[str]
    unit_cost: float
    quantity: int

    @property
    def total(self) -> float:
        return self.unit_cost * self.quantity


@dataclass(frozen=True)
class CollectionImage:
    """What a collection file holds: the records plus the collection's running counter.

    ``counter`` is the available-asset / active-department / active-technician
    count for the collections that keep one, and None for orders and materials.
    """

    records: Tuple[Any, ...] = ()
    counter: Optional[int] = None
