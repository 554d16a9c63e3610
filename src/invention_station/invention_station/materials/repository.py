from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Material


class MaterialRepository(Protocol):
    def list_all(self) -> Sequence[Material]:
        raise NotImplementedError

    def get_by_id(self, material_id: str) -> Optional[Material]:
        raise NotImplementedError

    def add(self, material: Material) -> None:
        raise NotImplementedError

    def update(self, material: Material) -> bool:
        raise NotImplementedError

    def delete_by_id(self, material_id: str) -> bool:
        raise NotImplementedError
