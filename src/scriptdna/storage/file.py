"""JSON file storage backend."""

from __future__ import annotations

import hashlib
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from scriptdna.errors import StorageError
from scriptdna.storage.base import Storage

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")

# Keeps "<stem>.json" and the ".<stem>.*.tmp" sibling under common filename limits
MAX_STEM_LENGTH = 120


class JsonFileStorage(Storage):
    """Stores each slot as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    @property
    def name(self) -> str:
        return "file"

    def path_for(self, key: str) -> Path:
        stem = _UNSAFE_KEY_CHARS.sub("_", key)
        if len(stem) > MAX_STEM_LENGTH:
            digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]
            stem = f"{stem[: MAX_STEM_LENGTH - 17]}-{digest}"
        return self.directory / f"{stem}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def _write(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file, then swap it in
            fd, tmp_name = tempfile.mkstemp(dir=str(self.directory), prefix=f".{path.stem}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
