from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from ..infra.errors import ConflictError, NotFoundError
from ..infra.models import FIRST_ID

R = TypeVar("R")

# Capacity grows in fixed steps and never shrinks.
GROWTH_STEP = 5

# Position returned by lookups that miss.
NOT_FOUND = -1


class GrowableCollection(Generic[R]):
    """Append-only record container. Records are never removed."""

    def __init__(self, records: Iterable[R] = ()) -> None:
        self._records: List[R] = []
        self._capacity = 0
        for r in records:
            self._push(r)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._records))

    def records(self) -> List[R]:
        return list(self._records)

    def at(self, position: int) -> R:
        return self._records[position]

    def _ensure_capacity(self, min_capacity: int) -> None:
        while self._capacity < min_capacity:
            self._capacity += GROWTH_STEP

    def _push(self, record: R) -> int:
        self._ensure_capacity(len(self._records) + 1)
        self._records.append(record)
        return len(self._records) - 1

    def add(self, record: R) -> R:
        self._push(record)
        return record


class RecordStore(GrowableCollection[R]):
    """Identifier-keyed store with an index from identifier to storage position.

    Lookups keep linear-scan semantics: the first record carrying an identifier
    wins, and ``position_of`` applies the store's visibility filter before
    answering. Subclasses set ``id_field`` and may override ``is_visible``.
    """

    id_field: str = ""

    def __init__(self, records: Iterable[R] = ()) -> None:
        self._index: Dict[int, int] = {}
        super().__init__(records)

    def record_id(self, record: R) -> int:
        return int(getattr(record, self.id_field))

    def is_visible(self, record: R) -> bool:
        return True

    def _push(self, record: R) -> int:
        pos = super()._push(record)
        self._index.setdefault(self.record_id(record), pos)
        return pos

    def ids(self) -> List[int]:
        return [self.record_id(r) for r in self._records]

    def max_id(self) -> int:
        """Largest identifier in use, 0 for an empty store."""
        return max(self.ids(), default=0)

    def next_id(self) -> int:
        if not self._records:
            return FIRST_ID
        return self.max_id() + 1

    def add(self, record: R) -> R:
        rid = self.record_id(record)
        if rid in self._index:
            raise ConflictError(f"{type(record).__name__} id {rid} already exists")
        return super().add(record)

    def replace(self, record: R) -> R:
        """Overwrite the stored record that has the same identifier."""
        rid = self.record_id(record)
        pos = self._index.get(rid)
        if pos is None:
            raise NotFoundError(f"{type(record).__name__} id {rid} not found")
        self._records[pos] = record
        return record

    def position_of(self, record_id: int) -> int:
        pos = self._index.get(int(record_id))
        if pos is None or not self.is_visible(self._records[pos]):
            return NOT_FOUND
        return pos

    def find(self, record_id: int) -> Optional[R]:
        pos = self.position_of(record_id)
        return None if pos == NOT_FOUND else self._records[pos]

    def find_any(self, record_id: int) -> Optional[R]:
        """Lookup that ignores the visibility filter."""
        pos = self._index.get(int(record_id))
        return None if pos is None else self._records[pos]
