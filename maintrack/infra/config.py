from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import jsonschema

from ..utils.yamlio import read_yaml
from .errors import ValidationError

PROFILE_PATH_ENV = "MAINTRACK_RUNTIME_PROFILE"
PROFILE_NAME_ENV = "MAINTRACK_PROFILE_NAME"

# Adapter kind enums are strict. Any unknown kind is rejected.
ALLOWED_ADAPTER_KINDS: Dict[str, Tuple[str, ...]] = {
    "collection_store": ("binary_file", "memory"),
    "log_sink": ("text_file", "null"),
    "prompter": ("console",),
}

REQUIRED_ADAPTER_KEYS = (
    "collection_store",
    "log_sink",
)

OPTIONAL_ADAPTER_KEYS = (
    "prompter",
)

# Used when no profile file exists at the default location.
BUILTIN_PROFILE: Dict[str, Any] = {
    "profile_name": "builtin_default",
    "description": "Binary collection files and a text log under ./data",
    "adapters": {
        "collection_store": {"kind": "binary_file", "settings": {"data_dir": "data"}},
        "log_sink": {"kind": "text_file", "settings": {"path": "data/log.txt"}},
        "prompter": {"kind": "console"},
    },
}


@dataclass(frozen=True)
class AdapterSpec:
    kind: str
    settings: Dict[str, Any]


@dataclass(frozen=True)
class RuntimeProfile:
    profile_name: str
    adapters: Dict[str, AdapterSpec]
    source: str = "builtin"

    def settings_for(self, key: str) -> Dict[str, Any]:
        spec = self.adapters.get(key)
        return dict(spec.settings) if spec is not None else {}


def _explicit_path(cli_path: Optional[str]) -> str:
    if cli_path and str(cli_path).strip():
        return str(cli_path).strip()
    return str(os.environ.get(PROFILE_PATH_ENV, "") or "").strip()


def resolve_runtime_profile_path(repo_root: Path, cli_path: Optional[str] = None) -> Path:
    """Resolve the runtime profile YAML path.

    Precedence:
      1) CLI flag --runtime-profile
      2) MAINTRACK_RUNTIME_PROFILE
      3) <repo_root>/config/runtime_profile.yml
    """
    explicit = _explicit_path(cli_path)
    if explicit:
        return Path(explicit).expanduser().resolve()
    return (repo_root / "config" / "runtime_profile.yml").resolve()


def _adapter_schema_for_kind(allowed_kinds: Tuple[str, ...]) -> Dict[str, Any]:
    # Fresh dict per adapter key; the enum list is attached per call.
    return {
        "type": "object",
        "required": ["kind"],
        "properties": {
            "kind": {"type": "string", "enum": list(allowed_kinds)},
            "settings": {"type": "object"},
        },
        "additionalProperties": False,
    }


def _adapters_schema() -> Dict[str, Any]:
    keys = REQUIRED_ADAPTER_KEYS + OPTIONAL_ADAPTER_KEYS
    return {
        "type": "object",
        "required": list(REQUIRED_ADAPTER_KEYS),
        "properties": {k: _adapter_schema_for_kind(ALLOWED_ADAPTER_KINDS[k]) for k in keys},
        "additionalProperties": False,
    }


def _profile_schema_single() -> Dict[str, Any]:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "required": ["profile_name", "adapters"],
        "properties": {
            "profile_name": {"type": "string", "minLength": 1},
            "description": {"type": "string"},
            "adapters": _adapters_schema(),
        },
        "additionalProperties": False,
    }


def _profile_schema_multi() -> Dict[str, Any]:
    """Schema for a multi-profile YAML file.

    Shape:
      default_profile: local
      profiles:
        local:
          adapters: { ... }
        scratch:
          adapters: { ... }
    """
    profile_obj = {
        "type": "object",
        "required": ["adapters"],
        "properties": {
            "description": {"type": "string"},
            "adapters": _adapters_schema(),
        },
        "additionalProperties": False,
    }
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "required": ["profiles"],
        "properties": {
            "default_profile": {"type": "string"},
            "profiles": {
                "type": "object",
                "minProperties": 1,
                "additionalProperties": profile_obj,
            },
        },
        "additionalProperties": False,
    }


def _validate_dict(data: Dict[str, Any]) -> None:
    # Whichever shape the document claims decides which error is reported.
    schema = _profile_schema_multi() if "profiles" in data else _profile_schema_single()
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(f"runtime profile schema validation failed: {e.message}")


def _select_profile(data: Dict[str, Any], source: str) -> Tuple[str, Dict[str, Any]]:
    if "profile_name" in data and "adapters" in data:
        return str(data["profile_name"]).strip(), data

    profiles = data["profiles"]
    wanted = str(os.environ.get(PROFILE_NAME_ENV, "") or "").strip()
    default_profile = str(data.get("default_profile", "") or "").strip()

    if wanted:
        if wanted not in profiles:
            raise ValidationError(f"{PROFILE_NAME_ENV}={wanted!r} not found in profiles: {source}")
        return wanted, profiles[wanted]

    if default_profile:
        if default_profile not in profiles:
            raise ValidationError(f"default_profile={default_profile!r} not found in profiles: {source}")
        return default_profile, profiles[default_profile]

    # Deterministic fallback: first key by sorted name.
    first = sorted(profiles.keys())[0]
    return first, profiles[first]


def parse_runtime_profile(data: Dict[str, Any], source: str = "builtin") -> RuntimeProfile:
    _validate_dict(data)
    profile_name, profile_dict = _select_profile(data, source)

    adapters: Dict[str, AdapterSpec] = {}
    for k, spec in profile_dict["adapters"].items():
        settings = spec.get("settings")
        adapters[k] = AdapterSpec(kind=str(spec["kind"]).strip(), settings=dict(settings or {}))

    return RuntimeProfile(profile_name=profile_name, adapters=adapters, source=source)


def load_runtime_profile(repo_root: Path, cli_path: Optional[str] = None) -> RuntimeProfile:
    """Load and validate a runtime profile.

    An explicitly requested file (flag or MAINTRACK_RUNTIME_PROFILE) must exist.
    When the default location has no file, the built-in profile is used.
    MAINTRACK_PROFILE_NAME selects a profile in a multi-profile file.
    """
    path = resolve_runtime_profile_path(repo_root, cli_path)
    if not path.exists():
        if _explicit_path(cli_path):
            raise ValidationError(f"runtime profile not found: {path}")
        return parse_runtime_profile(BUILTIN_PROFILE)

    return parse_runtime_profile(read_yaml(path), source=str(path))
