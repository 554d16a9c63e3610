from __future__ import annotations

import pytest

from src.invention_station.invention_station.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_everyone_lists_links(container):
    assert [link.title for link in container.app_link_service.list_all()] == ["Google Classroom", "GitHub"]


def test_admin_creates_link_with_defaults(container, admin):
    link = container.app_link_service.create(admin, title="Scratch", url="https://scratch.mit.edu/")

    assert link.icon == "globe"
    assert link.category == "リンク"
    assert container.app_links_repo.get_by_id(link.id) == link


@pytest.mark.parametrize("title,url", [("", "https://x"), ("x", " ")])
def test_title_and_url_required(container, admin, title, url):
    with pytest.raises(ValidationError, match="タイトルとURLは必須です"):
        container.app_link_service.create(admin, title=title, url=url)


def test_only_admin_edits_links(container, instructor, admin):
    links = container.app_link_service

    with pytest.raises(AuthorizationError):
        links.create(instructor, title="x", url="https://x")
    with pytest.raises(AuthorizationError):
        links.delete(instructor, "1")

    links.delete(admin, "1")
    with pytest.raises(NotFoundError):
        links.delete(admin, "1")
