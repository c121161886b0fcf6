from __future__ import annotations

import os
import tempfile
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` in one rename.

    The bytes go to a hidden ``.<name>.*.part`` sibling first. On any failure
    the sibling is removed and the error propagates; the previous collection
    file, if any, is still in place.
    """
    ensure_dir(path.parent)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".part", dir=str(path.parent))
    part = Path(tmp)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(part, path)
    except BaseException:
        part.unlink(missing_ok=True)
        raise


def append_text_line(path: Path, line: str, encoding: str = "utf-8") -> None:
    ensure_dir(path.parent)
    with path.open("a", encoding=encoding, newline="") as f:
        f.write(line.rstrip("\n") + "\n")
