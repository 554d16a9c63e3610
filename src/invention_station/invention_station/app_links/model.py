from __future__ import annotations

from dataclasses import asdict, dataclass

DEFAULT_ICON = "globe"
DEFAULT_CATEGORY = "リンク"


@dataclass(frozen=True)
class AppLink:
    """Domain entity: shortcut to an external tool shown on the portal."""

    id: str
    title: str
    url: str
    icon: str = DEFAULT_ICON
    description: str = ""
    category: str = DEFAULT_CATEGORY

    def to_view(self) -> dict:
        return asdict(self)
