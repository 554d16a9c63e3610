from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def add(self, shift: Shift) -> None:
        raise NotImplementedError

    def update(self, shift: Shift) -> bool:
        raise NotImplementedError

    def delete_by_id(self, shift_id: str) -> bool:
        raise NotImplementedError
