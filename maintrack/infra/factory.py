from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.time import Clock, local_now
from .adapters.codecs import COLLECTION_NAMES, codec_for
from .config import RuntimeProfile
from .contracts import CollectionStore, LogSink, Prompter
from .errors import NotConfiguredError, ValidationError

DEFAULT_DATA_DIR = "data"
DEFAULT_LOG_FILE = "log.txt"


@dataclass
class InfraBundle:
    profile: RuntimeProfile
    log_sink: LogSink
    collections: Dict[str, CollectionStore] = field(default_factory=dict)
    prompter: Optional[Prompter] = None

    def collection(self, name: str) -> CollectionStore:
        store = self.collections.get(name)
        if store is None:
            raise NotConfiguredError(f"no collection store wired for {name!r} in profile {self.profile.profile_name!r}")
        return store

    def require_prompter(self) -> Prompter:
        if self.prompter is None:
            raise NotConfiguredError(f"profile {self.profile.profile_name!r} has no prompter adapter")
        return self.prompter

    def describe(self) -> Dict[str, Any]:
        def _d(x: Any) -> Dict[str, Any]:
            if hasattr(x, "describe") and callable(getattr(x, "describe")):
                return dict(getattr(x, "describe")())
            return {"class": x.__class__.__name__}

        return {
            "profile_name": self.profile.profile_name,
            "source": self.profile.source,
            "adapters": {
                "collection_store": {name: _d(self.collections[name]) for name in sorted(self.collections)},
                "log_sink": _d(self.log_sink),
                "prompter": _d(self.prompter) if self.prompter is not None else {"class": "NotConfigured"},
            },
        }


def _resolve(base_dir: Path, raw: str) -> Path:
    p = Path(raw).expanduser()
    return p if p.is_absolute() else (base_dir / p)


def _collection_files(settings: Dict[str, Any]) -> Dict[str, str]:
    files = settings.get("files") or {}
    if not isinstance(files, dict):
        raise ValidationError("collection_store setting 'files' must be a mapping")
    unknown = sorted(set(files) - set(COLLECTION_NAMES))
    if unknown:
        raise ValidationError(f"collection_store files has unknown collections: {unknown} (allowed: {list(COLLECTION_NAMES)})")
    return {name: str(files.get(name) or f"{name}.bin") for name in COLLECTION_NAMES}


def build_infra(
    *,
    profile: RuntimeProfile,
    base_dir: Optional[Path] = None,
    prompter: Optional[Prompter] = None,
    clock: Clock = local_now,
) -> InfraBundle:
    """Build concrete adapter instances from a runtime profile.

    Relative paths in adapter settings resolve against ``base_dir`` (the
    current directory by default). An explicit ``prompter`` wins over the
    profile's prompter adapter.
    """
    base_dir = (base_dir or Path.cwd()).resolve()

    # 1) Log sink
    ls_spec = profile.adapters["log_sink"]
    if ls_spec.kind == "text_file":
        from .adapters.log_text import TextFileLogSink

        raw = str(ls_spec.settings.get("path", "") or "").strip() or f"{DEFAULT_DATA_DIR}/{DEFAULT_LOG_FILE}"
        log_sink: LogSink = TextFileLogSink(_resolve(base_dir, raw), clock=clock)
    elif ls_spec.kind == "null":
        from .adapters.log_text import NullLogSink

        log_sink = NullLogSink()
    else:
        raise ValidationError(f"unknown log_sink adapter kind: {ls_spec.kind!r}")

    # 2) Collection stores
    cs_spec = profile.adapters["collection_store"]
    collections: Dict[str, CollectionStore] = {}
    if cs_spec.kind == "binary_file":
        from .adapters.binary_file import BinaryCollectionFile

        data_dir = _resolve(base_dir, str(cs_spec.settings.get("data_dir", "") or "").strip() or DEFAULT_DATA_DIR)
        for name, filename in _collection_files(cs_spec.settings).items():
            collections[name] = BinaryCollectionFile(data_dir / filename, codec_for(name), log=log_sink)
    elif cs_spec.kind == "memory":
        from .adapters.binary_file import MemoryCollectionStore

        for name in COLLECTION_NAMES:
            collections[name] = MemoryCollectionStore(name)
    else:
        raise ValidationError(f"unknown collection_store adapter kind: {cs_spec.kind!r}")

    # 3) Prompter
    if prompter is None and "prompter" in profile.adapters:
        pr_kind = profile.adapters["prompter"].kind
        if pr_kind == "console":
            from .adapters.console import ConsolePrompter

            prompter = ConsolePrompter()
        else:
            raise ValidationError(f"unknown prompter adapter kind: {pr_kind!r}")

    return InfraBundle(profile=profile, log_sink=log_sink, collections=collections, prompter=prompter)
