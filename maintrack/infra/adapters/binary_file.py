from __future__ import annotations

import struct
from pathlib import Path
from typing import Any, Dict, Optional

from ...utils.fs import atomic_write_bytes
from ..contracts import CollectionStore, LogSink
from ..errors import ValidationError
from ..models import CollectionImage
from .codecs import CollectionCodec, decode_image, encode_image


class BinaryCollectionFile(CollectionStore):
    """CollectionStore backed by one little-endian binary file per collection.

    A missing file loads as an empty collection. A corrupt file raises
    ValidationError from ``load``. Save failures are reported and logged,
    and the file on disk is left as it was.
    """

    def __init__(self, path: Path, codec: CollectionCodec, log: Optional[LogSink] = None):
        self.path = path
        self.codec = codec
        self.log = log

    def load(self) -> CollectionImage:
        if not self.path.exists():
            return CollectionImage()
        data = self.path.read_bytes()
        return decode_image(self.codec, data, source=str(self.path))

    def save(self, image: CollectionImage) -> bool:
        try:
            data = encode_image(self.codec, image)
            atomic_write_bytes(self.path, data)
        except (OSError, struct.error, ValueError, ValidationError) as e:
            print(f"[persistence][WARN] failed to save {self.codec.name} to {self.path}: {e}")
            if self.log is not None:
                self.log.append(f"Error: failed to save {self.codec.name} file {self.path.name}")
            return False
        return True

    def describe(self) -> Dict[str, Any]:
        return {"class": self.__class__.__name__, "collection": self.codec.name, "path": str(self.path)}


class MemoryCollectionStore(CollectionStore):
    """In-process CollectionStore. Nothing survives the process."""

    def __init__(self, name: str, image: Optional[CollectionImage] = None):
        self.name = name
        self.image = image or CollectionImage()
        self.saves = 0

    def load(self) -> CollectionImage:
        return self.image

    def save(self, image: CollectionImage) -> bool:
        self.image = image
        self.saves += 1
        return True

    def describe(self) -> Dict[str, Any]:
        return {"class": self.__class__.__name__, "collection": self.name}
