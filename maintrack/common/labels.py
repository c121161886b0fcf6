from __future__ import annotations

from typing import Dict

ASSET_CATEGORY_LABELS: Dict[str, str] = {
    "vehicle": "Vehicle",
    "it_equipment": "IT equipment",
    "furniture": "Furniture",
    "tool": "Tool",
    "other": "Other",
}

ASSET_STATE_LABELS: Dict[str, str] = {
    "operational": "Operational",
    "in_maintenance": "In maintenance",
    "decommissioned": "Decommissioned",
    "inactive": "Inactive",
}

DEPARTMENT_STATE_LABELS: Dict[str, str] = {
    "active": "ACTIVE",
    "inactive": "INACTIVE",
}

TECHNICIAN_SPECIALTY_LABELS: Dict[str, str] = {
    "it": "IT technician",
    "mechanic": "Mechanic",
    "electrician": "Electrician",
    "general_maintenance": "General maintenance",
    "other": "Other",
}

TECHNICIAN_STATE_LABELS: Dict[str, str] = {
    "active": "Active",
    "busy": "Busy",
    "inactive": "Inactive",
}

ORDER_STATE_LABELS: Dict[str, str] = {
    "pending": "Pending",
    "execution": "In execution",
    "concluded": "Concluded",
    "cancelled": "Cancelled",
}

PRIORITY_LABELS: Dict[str, str] = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
}

MAINTENANCE_TYPE_LABELS: Dict[str, str] = {
    "preventive": "Preventive",
    "corrective": "Corrective",
}


def label(table: Dict[str, str], value: str) -> str:
    return table.get(str(value or ""), "Unknown")
