from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, List

from _testutil import ensure_repo_on_path

ensure_repo_on_path()

from maintrack.infra.models import Asset, Department, Order, Stamp, Technician  # noqa: E402
from maintrack.stores import Registry  # noqa: E402


class ScriptedPrompter:
    """Prompter that replays a fixed list of answers. Running out raises EOFError."""

    def __init__(self, answers: List[Any]):
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.pauses = 0

    def _next(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError(prompt)
        return self.answers.pop(0)

    def read_positive_int(self, prompt: str) -> int:
        return int(self._next(prompt))

    def read_int_in_range(self, min_value: int, max_value: int, prompt: str) -> int:
        return int(self._next(prompt))

    def read_positive_float(self, prompt: str) -> float:
        return float(self._next(prompt))

    def read_dynamic_string(self, prompt: str) -> str:
        return str(self._next(prompt))

    def read_validated_name(self, prompt: str) -> str:
        return str(self._next(prompt))

    def pause(self) -> None:
        self.pauses += 1


class MemoryLogSink:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def append(self, message: str) -> None:
        self.lines.append(message)

    def read_lines(self) -> List[str]:
        return list(self.lines)


class Echo:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(str(line))

    def text(self) -> str:
        return "\n".join(self.lines)


def fixed_clock(*args: int) -> Callable[[], datetime]:
    moment = datetime(*args)
    return lambda: moment


def sample_registry() -> Registry:
    """Two departments, three operational assets and two active technicians."""
    reg = Registry()
    reg.departments.add(Department(10, "Logistics", "Ana Silva", "912345678"))
    reg.departments.add(Department(11, "Finance", "Rui Costa", "finance@example.com"))
    reg.departments.active_count = 2
    reg.assets.add(Asset(10, "Van", "vehicle", 10, location="Garage"))
    reg.assets.add(Asset(11, "Laptop", "it_equipment", 11, location="Office"))
    reg.assets.add(Asset(12, "Drill", "tool", 10, location=None))
    reg.assets.available = 3
    reg.technicians.add(Technician(10, "Joao", "mechanic"))
    reg.technicians.add(Technician(11, "Marta", "it"))
    reg.technicians.active_count = 2
    return reg


def executing_order(order_id: int, asset_id: int, technician_id: int, department_id: int = 10) -> Order:
    return Order(
        order_id=order_id,
        asset_id=asset_id,
        department_id=department_id,
        priority="low",
        maintenance_type="preventive",
        state="execution",
        technician_id=technician_id,
        started_at=Stamp(1, 1, 2024, 9, 0, 0),
    )
