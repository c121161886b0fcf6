from __future__ import annotations

from .assets import AssetCatalog, search_by_prefix
from .departments import DepartmentCatalog
from .technicians import TechnicianCatalog

__all__ = ["AssetCatalog", "DepartmentCatalog", "TechnicianCatalog", "search_by_prefix"]
