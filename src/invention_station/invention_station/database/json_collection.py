from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_json_array(store: KeyValueStore, key: str) -> Optional[List[Any]]:
    """Read the JSON array stored under ``key``.

    Returns None when the key is absent. A malformed blob is logged and read
    as an empty list; it is never surfaced to the user.
    """

    raw = store.get(key)
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Malformed JSON under %s, ignoring stored value", key)
        return []
    if not isinstance(data, list):
        logger.warning("Expected a JSON array under %s, got %s", key, type(data).__name__)
        return []
    return data


def save_json_array(store: KeyValueStore, key: str, items: Sequence[Any]) -> None:
    store.set(key, json.dumps(list(items), ensure_ascii=False))


class JsonCollection(Generic[T]):
    """A whole collection of entities kept as one JSON array under a key.

    Every mutation rewrites the full array (single writer, no partial updates).
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        *,
        to_record: Callable[[T], dict],
        from_record: Callable[[dict], T],
    ):
        self._store = store
        self._key = key
        self._to_record = to_record
        self._from_record = from_record

    @property
    def key(self) -> str:
        return self._key

    def _read(self) -> Tuple[List[T], List[Any]]:
        items: List[T] = []
        unreadable: List[Any] = []
        for rec in load_json_array(self._store, self._key) or []:
            try:
                if not isinstance(rec, dict):
                    raise TypeError(f"expected an object, got {type(rec).__name__}")
                items.append(self._from_record(rec))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed record in %s: %r", self._key, rec)
                unreadable.append(rec)
        return items, unreadable

    def load(self) -> List[T]:
        return self._read()[0]

    def save(self, items: Sequence[T]) -> None:
        """Replace the readable records with ``items``.

        Records that could not be parsed are written back unchanged after them.
        """

        _, unreadable = self._read()
        save_json_array(self._store, self._key, [self._to_record(i) for i in items] + unreadable)

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        return next((i for i in self.load() if predicate(i)), None)

    def append(self, item: T) -> None:
        items = self.load()
        items.append(item)
        self.save(items)

    def replace(self, predicate: Callable[[T], bool], item: T) -> bool:
        items = self.load()
        for idx, current in enumerate(items):
            if predicate(current):
                items[idx] = item
                self.save(items)
                return True
        return False

    def remove(self, predicate: Callable[[T], bool]) -> bool:
        items = self.load()
        kept = [i for i in items if not predicate(i)]
        if len(kept) == len(items):
            return False
        self.save(kept)
        return True


def as_str_list(value: Any) -> List[str]:
    if not value:
        return []
    return [str(v) for v in value]
