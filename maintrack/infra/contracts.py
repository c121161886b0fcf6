from __future__ import annotations

from typing import List, Protocol

from .models import CollectionImage


class CollectionStore(Protocol):
    """Persistence port for one entity collection.

    ``load`` returns an empty image when nothing has been saved yet.
    ``save`` reports failure through its return value and the log sink, never by raising.
    """

    def load(self) -> CollectionImage:
        raise NotImplementedError

    def save(self, image: CollectionImage) -> bool:
        raise NotImplementedError


class LogSink(Protocol):
    """Append-only audit log. Appends are fire-and-forget."""

    def append(self, message: str) -> None:
        raise NotImplementedError

    def read_lines(self) -> List[str]:
        raise NotImplementedError


class Prompter(Protocol):
    """Interaction port. Every read blocks until the input satisfies its predicate."""

    def read_positive_int(self, prompt: str) -> int:
        raise NotImplementedError

    def read_int_in_range(self, min_value: int, max_value: int, prompt: str) -> int:
        raise NotImplementedError

    def read_positive_float(self, prompt: str) -> float:
        raise NotImplementedError

    def read_dynamic_string(self, prompt: str) -> str:
        raise NotImplementedError

    def read_validated_name(self, prompt: str) -> str:
        """At least 3 characters, leading uppercase letter, no digits."""
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError
