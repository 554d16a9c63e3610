from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notice


class NoticeRepository(Protocol):
    def list_all(self) -> Sequence[Notice]:
        raise NotImplementedError

    def get_by_id(self, notice_id: str) -> Optional[Notice]:
        raise NotImplementedError

    def add(self, notice: Notice) -> None:
        raise NotImplementedError

    def update(self, notice: Notice) -> bool:
        raise NotImplementedError

    def delete_by_id(self, notice_id: str) -> bool:
        raise NotImplementedError
