from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AppLink


class AppLinkRepository(Protocol):
    def list_all(self) -> Sequence[AppLink]:
        raise NotImplementedError

    def get_by_id(self, link_id: str) -> Optional[AppLink]:
        raise NotImplementedError

    def add(self, link: AppLink) -> None:
        raise NotImplementedError

    def update(self, link: AppLink) -> bool:
        raise NotImplementedError

    def delete_by_id(self, link_id: str) -> bool:
        raise NotImplementedError
