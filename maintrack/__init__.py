"""Asset maintenance tracker.

Records assets, departments, technicians, maintenance work orders and the
materials consumed by those orders. Each collection is persisted to its own
binary file between runs; see ``maintrack.cli`` for the entry point.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
