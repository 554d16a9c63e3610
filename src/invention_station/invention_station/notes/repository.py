from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import InventionNote


class InventionNoteRepository(Protocol):
    def list_all(self) -> Sequence[InventionNote]:
        raise NotImplementedError

    def get_by_id(self, note_id: str) -> Optional[InventionNote]:
        raise NotImplementedError

    def add(self, note: InventionNote) -> None:
        raise NotImplementedError

    def update(self, note: InventionNote) -> bool:
        raise NotImplementedError

    def delete_by_id(self, note_id: str) -> bool:
        raise NotImplementedError
