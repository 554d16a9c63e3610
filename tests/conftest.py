from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.invention_station.invention_station.container import build_container
from src.invention_station.invention_station.database.bootstrap import seed_defaults


class MemoryStore:
    """Dict-backed KeyValueStore."""

    def __init__(self, data: Optional[dict] = None):
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None

    def keys(self, prefix: str = ""):
        return sorted(k for k in self.data if k.startswith(prefix))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 11, 10, 9, 30, 0)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def seeded_store(store: MemoryStore) -> MemoryStore:
    seed_defaults(store)
    return store


@pytest.fixture
def container(seeded_store):
    return build_container(seeded_store)


@pytest.fixture
def admin(container):
    return container.users_repo.get_by_id("1")


@pytest.fixture
def instructor(container):
    return container.users_repo.get_by_id("2")


@pytest.fixture
def student(container):
    return container.users_repo.get_by_id("3")


@pytest.fixture
def parent(container):
    return container.users_repo.get_by_id("4")
