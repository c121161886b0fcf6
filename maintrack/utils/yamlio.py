from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from ..infra.errors import ValidationError


def read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"YAML parse error in {path}: {e}")
    if not isinstance(data, dict):
        raise ValidationError(f"YAML document must be a mapping: {path}")
    return data
