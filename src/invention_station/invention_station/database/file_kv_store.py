from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from .kv_store import KeyValueStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.\-]+$")


class FileKeyValueStore(KeyValueStore):
    """One ``<key>.json`` file per key inside ``data_dir``."""

    def __init__(self, data_dir: str | Path):
        self._dir = Path(data_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        # Write then rename so a crash never leaves half a blob behind.
        fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def keys(self, prefix: str = "") -> Sequence[str]:
        return sorted(p.stem for p in self._dir.glob("*.json") if p.stem.startswith(prefix))
