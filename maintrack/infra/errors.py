from __future__ import annotations


class MaintrackError(Exception):
    """Base class for maintrack errors."""


class NotFoundError(MaintrackError):
    """Raised when a requested record cannot be found."""


class ValidationError(MaintrackError):
    """Raised when a config, a stored file, or an input fails validation."""


class ConflictError(MaintrackError):
    """Raised when an operation conflicts with existing state."""


class NotConfiguredError(MaintrackError):
    """Raised when a requested adapter is declared but not wired for the current runtime."""


class TransitionError(ConflictError):
    """Raised when an order cannot move to the requested state."""


class OrderClosedError(TransitionError):
    """Raised when an order in a terminal state is asked to advance."""

    def __init__(self, order_id: int, state: str):
        self.order_id = order_id
        self.state = state
        super().__init__(f"order {order_id} is already {state}")


class TechnicianUnavailableError(TransitionError):
    """Raised when a technician cannot take a pending order.

    ``reason`` is one of ``not_found``, ``inactive`` or ``at_capacity``.
    """

    def __init__(self, technician_id: int, reason: str):
        self.technician_id = technician_id
        self.reason = reason
        super().__init__(f"technician {technician_id} unavailable: {reason}")
