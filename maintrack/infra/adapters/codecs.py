from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import ValidationError
from ..models import (
    Asset,
    CalendarDate,
    CollectionImage,
    Department,
    Material,
    Order,
    Stamp,
    Technician,
)

_INT = struct.Struct("<i")
_DOUBLE = struct.Struct("<d")

# Largest integer a 4-byte signed field can hold.
MAX_STORED_INT = 2**31 - 1

# Enum codes as stored on disk. The numbering is part of the file format.
ASSET_CATEGORY_CODES: Dict[str, int] = {"vehicle": 1, "it_equipment": 2, "furniture": 3, "tool": 4, "other": 5}
ASSET_STATE_CODES: Dict[str, int] = {"operational": 0, "in_maintenance": 1, "decommissioned": 2, "inactive": 3}
DEPARTMENT_STATE_CODES: Dict[str, int] = {"active": 1, "inactive": 2}
TECHNICIAN_SPECIALTY_CODES: Dict[str, int] = {"it": 1, "mechanic": 2, "electrician": 3, "general_maintenance": 4, "other": 5}
TECHNICIAN_STATE_CODES: Dict[str, int] = {"active": 0, "busy": 1, "inactive": 2}
ORDER_STATE_CODES: Dict[str, int] = {"pending": 0, "execution": 1, "concluded": 2, "cancelled": 3}
PRIORITY_CODES: Dict[str, int] = {"low": 1, "medium": 2, "high": 3}
MAINTENANCE_TYPE_CODES: Dict[str, int] = {"preventive": 1, "corrective": 2}

# Stored in place of an absent identifier reference. Real identifiers start at 10.
NO_ID = 0


class BinaryWriter:
    def __init__(self) -> None:
        self._parts: List[bytes] = []

    def write_int(self, value: int) -> None:
        self._parts.append(_INT.pack(int(value)))

    def write_double(self, value: float) -> None:
        self._parts.append(_DOUBLE.pack(float(value)))

    def write_text(self, value: Optional[str]) -> None:
        """Length-prefixed text. The length counts a trailing NUL; 0 marks an absent value."""
        if value is None:
            self.write_int(0)
            return
        raw = value.encode("utf-8") + b"\0"
        self.write_int(len(raw))
        self._parts.append(raw)

    def write_enum(self, codes: Dict[str, int], value: str) -> None:
        if value not in codes:
            raise ValidationError(f"cannot encode enum value {value!r} (allowed: {sorted(codes)})")
        self.write_int(codes[value])

    def write_ref(self, value: Optional[int]) -> None:
        self.write_int(NO_ID if value is None else value)

    def write_date(self, value: Optional[CalendarDate]) -> None:
        d = value or CalendarDate(0, 0, 0)
        for n in (d.day, d.month, d.year):
            self.write_int(n)

    def write_stamp(self, value: Optional[Stamp]) -> None:
        s = value or Stamp(0, 0, 0)
        for n in (s.day, s.month, s.year, s.hour, s.minute, s.second):
            self.write_int(n)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


class BinaryReader:
    """Sequential reader over a collection file. Truncation raises ValidationError."""

    def __init__(self, data: bytes, source: str = "<bytes>") -> None:
        self._data = data
        self._pos = 0
        self.source = source

    def _take(self, n: int) -> bytes:
        if n < 0 or self._pos + n > len(self._data):
            raise ValidationError(f"truncated collection file {self.source} at offset {self._pos}")
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def read_int(self) -> int:
        return _INT.unpack(self._take(_INT.size))[0]

    def read_double(self) -> float:
        return _DOUBLE.unpack(self._take(_DOUBLE.size))[0]

    def read_text(self) -> Optional[str]:
        n = self.read_int()
        if n == 0:
            return None
        raw = self._take(n)
        if not raw.endswith(b"\0"):
            raise ValidationError(f"unterminated text field in {self.source} at offset {self._pos - n}")
        try:
            return raw[:-1].decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(f"invalid text field in {self.source}: {e}")

    def read_enum(self, codes: Dict[str, int]) -> Any:
        code = self.read_int()
        for name, c in codes.items():
            if c == code:
                return name
        raise ValidationError(f"unknown enum code {code} in {self.source} (allowed: {sorted(codes.values())})")

    def read_ref(self) -> Optional[int]:
        v = self.read_int()
        return None if v == NO_ID else v

    def read_date(self) -> Optional[CalendarDate]:
        d = CalendarDate(self.read_int(), self.read_int(), self.read_int())
        return d if (d.day, d.month, d.year) != (0, 0, 0) else None

    def read_stamp(self) -> Optional[Stamp]:
        s = Stamp(*(self.read_int() for _ in range(6)))
        return s if (s.day, s.month, s.year, s.hour, s.minute, s.second) != (0, 0, 0, 0, 0, 0) else None

    def at_end(self) -> bool:
        return self._pos == len(self._data)


@dataclass(frozen=True)
class CollectionCodec:
    name: str
    has_counter: bool
    pack: Callable[[BinaryWriter, Any], None]
    unpack: Callable[[BinaryReader], Any]


def _pack_department(w: BinaryWriter, d: Department) -> None:
    w.write_int(d.department_id)
    w.write_text(d.name)
    w.write_text(d.responsible)
    w.write_text(d.contact)
    w.write_enum(DEPARTMENT_STATE_CODES, d.state)


def _unpack_department(r: BinaryReader) -> Department:
    return Department(
        department_id=r.read_int(),
        name=r.read_text(),
        responsible=r.read_text(),
        contact=r.read_text(),
        state=r.read_enum(DEPARTMENT_STATE_CODES),
    )


def _pack_asset(w: BinaryWriter, a: Asset) -> None:
    w.write_int(a.asset_id)
    w.write_text(a.name)
    w.write_enum(ASSET_CATEGORY_CODES, a.category)
    w.write_text(a.location)
    w.write_date(a.acquired_on)
    w.write_date(a.decommissioned_on)
    w.write_enum(ASSET_STATE_CODES, a.state)
    w.write_int(a.corrective_count)
    w.write_double(a.accrued_cost)
    w.write_double(a.unit_cost)
    w.write_int(a.department_id)


def _unpack_asset(r: BinaryReader) -> Asset:
    asset_id = r.read_int()
    name = r.read_text()
    category = r.read_enum(ASSET_CATEGORY_CODES)
    location = r.read_text()
    acquired_on = r.read_date()
    decommissioned_on = r.read_date()
    state = r.read_enum(ASSET_STATE_CODES)
    corrective_count = r.read_int()
    accrued_cost = r.read_double()
    unit_cost = r.read_double()
    department_id = r.read_int()
    return Asset(
        asset_id=asset_id,
        name=name,
        category=category,
        department_id=department_id,
        location=location,
        unit_cost=unit_cost,
        acquired_on=acquired_on,
        decommissioned_on=decommissioned_on,
        state=state,
        corrective_count=corrective_count,
        accrued_cost=accrued_cost,
    )


def _pack_technician(w: BinaryWriter, t: Technician) -> None:
    w.write_int(t.technician_id)
    w.write_text(t.name)
    w.write_enum(TECHNICIAN_SPECIALTY_CODES, t.specialty)
    w.write_enum(TECHNICIAN_STATE_CODES, t.state)
    w.write_ref(t.order_id)


def _unpack_technician(r: BinaryReader) -> Technician:
    return Technician(
        technician_id=r.read_int(),
        name=r.read_text(),
        specialty=r.read_enum(TECHNICIAN_SPECIALTY_CODES),
        state=r.read_enum(TECHNICIAN_STATE_CODES),
        order_id=r.read_ref(),
    )


def _pack_order(w: BinaryWriter, o: Order) -> None:
    w.write_int(o.order_id)
    w.write_int(o.asset_id)
    w.write_int(o.department_id)
    w.write_ref(o.technician_id)
    w.write_enum(ORDER_STATE_CODES, o.state)
    w.write_enum(PRIORITY_CODES, o.priority)
    w.write_enum(MAINTENANCE_TYPE_CODES, o.maintenance_type)
    w.write_stamp(o.started_at)
    w.write_stamp(o.ended_at)


def _unpack_order(r: BinaryReader) -> Order:
    order_id = r.read_int()
    asset_id = r.read_int()
    department_id = r.read_int()
    technician_id = r.read_ref()
    state = r.read_enum(ORDER_STATE_CODES)
    priority = r.read_enum(PRIORITY_CODES)
    maintenance_type = r.read_enum(MAINTENANCE_TYPE_CODES)
    started_at = r.read_stamp()
    ended_at = r.read_stamp()
    return Order(
        order_id=order_id,
        asset_id=asset_id,
        department_id=department_id,
        priority=priority,
        maintenance_type=maintenance_type,
        state=state,
        technician_id=technician_id,
        started_at=started_at,
        ended_at=ended_at,
    )


def _pack_material(w: BinaryWriter, m: Material) -> None:
    w.write_text(m.name)
    w.write_double(m.unit_cost)
    w.write_int(m.quantity)
    w.write_int(m.order_id)


def _unpack_material(r: BinaryReader) -> Material:
    name = r.read_text()
    unit_cost = r.read_double()
    quantity = r.read_int()
    order_id = r.read_int()
    return Material(order_id=order_id, name=name, unit_cost=unit_cost, quantity=quantity)


CODECS: Dict[str, CollectionCodec] = {
    "departments": CollectionCodec("departments", True, _pack_department, _unpack_department),
    "assets": CollectionCodec("assets", True, _pack_asset, _unpack_asset),
    "technicians": CollectionCodec("technicians", True, _pack_technician, _unpack_technician),
    "orders": CollectionCodec("orders", False, _pack_order, _unpack_order),
    "materials": CollectionCodec("materials", False, _pack_material, _unpack_material),
}

COLLECTION_NAMES: Tuple[str, ...] = tuple(CODECS)


def codec_for(name: str) -> CollectionCodec:
    try:
        return CODECS[name]
    except KeyError:
        raise ValidationError(f"unknown collection {name!r} (allowed: {list(COLLECTION_NAMES)})")


def encode_image(codec: CollectionCodec, image: CollectionImage) -> bytes:
    w = BinaryWriter()
    w.write_int(len(image.records))
    if codec.has_counter:
        w.write_int(image.counter or 0)
    for rec in image.records:
        codec.pack(w, rec)
    return w.getvalue()


def decode_image(codec: CollectionCodec, data: bytes, source: str = "<bytes>") -> CollectionImage:
    r = BinaryReader(data, source)
    count = r.read_int()
    if count < 0:
        raise ValidationError(f"negative record count {count} in {source}")
    counter = r.read_int() if codec.has_counter else None
    records = tuple(codec.unpack(r) for _ in range(count))
    if not r.at_end():
        raise ValidationError(f"trailing bytes after {count} records in {source}")
    return CollectionImage(records=records, counter=counter)
