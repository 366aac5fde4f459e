from __future__ import annotations

"""Progress persistence: one named record behind a get/set contract.

The record is stored as an opaque JSON blob under a fixed key. Reads never
fail: a missing, unreadable or invalid blob yields the zeroed default.
Writes replace the whole record.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from pydantic import ValidationError

from ..app.explain import trace as xtrace
from .schema import STORAGE_KEY, ProgressRecord


class KeyValueBackend(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """In-process backend (tests, practice sandboxes)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileBackend:
    """One `<key>.json` file per key inside a data directory."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir).expanduser()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        p = self._path(key)
        try:
            return p.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            xtrace("progress_unreadable", {"path": str(p), "error": repr(exc)})
            return None

    def set_item(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        p = self._path(key)
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=str(self.data_dir))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, p)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class ProgressStore:
    def __init__(self, backend: Optional[KeyValueBackend] = None, key: str = STORAGE_KEY) -> None:
        self.backend: KeyValueBackend = backend if backend is not None else MemoryBackend()
        self.key = key

    def get(self) -> ProgressRecord:
        raw = self.backend.get_item(self.key)
        if not raw:
            return ProgressRecord()
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("progress blob is not an object")
            return ProgressRecord.model_validate(data)
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError too
            xtrace("progress_fallback", {"key": self.key, "error": str(exc).splitlines()[0]})
            return ProgressRecord()

    def set(self, record: ProgressRecord) -> None:
        self.backend.set_item(self.key, json.dumps(record.to_blob(), separators=(",", ":")))
