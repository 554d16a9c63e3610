from __future__ import annotations

from typing import Optional, Protocol, Sequence


class KeyValueStore(Protocol):
    """Flat ``key -> text`` storage.

    Every collection of the portal is one JSON array stored under a fixed key,
    so this is the only persistence interface the repositories need.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> Sequence[str]:
        raise NotImplementedError
