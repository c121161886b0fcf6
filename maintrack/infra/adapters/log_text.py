from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from ...utils.fs import append_text_line
from ...utils.time import Clock, local_now, log_timestamp
from ..contracts import LogSink


class TextFileLogSink(LogSink):
    """Append-only text log. Each line reads ``[DD-MM-YYYY HH:MM:SS] message``.

    A failed append never interrupts the caller.
    """

    def __init__(self, path: Path, clock: Clock = local_now):
        self.path = path
        self.clock = clock

    def append(self, message: str) -> None:
        line = f"[{log_timestamp(self.clock)}] {message}"
        try:
            append_text_line(self.path, line)
        except OSError as e:
            print(f"[log][WARN] failed to append to {self.path}: {e}")

    def read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        return self.path.read_text(encoding="utf-8", errors="replace").splitlines()

    def describe(self) -> Dict[str, Any]:
        return {"class": self.__class__.__name__, "path": str(self.path)}


class NullLogSink(LogSink):
    def append(self, message: str) -> None:
        return None

    def read_lines(self) -> List[str]:
        return []

    def describe(self) -> Dict[str, Any]:
        return {"class": self.__class__.__name__}
