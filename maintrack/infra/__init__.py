from __future__ import annotations

from .errors import (
    ConflictError,
    MaintrackError,
    NotConfiguredError,
    NotFoundError,
    OrderClosedError,
    TechnicianUnavailableError,
    TransitionError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "MaintrackError",
    "NotConfiguredError",
    "NotFoundError",
    "OrderClosedError",
    "TechnicianUnavailableError",
    "TransitionError",
    "ValidationError",
]
