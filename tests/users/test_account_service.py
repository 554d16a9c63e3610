from __future__ import annotations

import pytest

from src.invention_station.invention_station.core.enums import Role
from src.invention_station.invention_station.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_only_admin_manages_accounts(container, instructor):
    with pytest.raises(AuthorizationError):
        container.account_service.list_accounts(instructor)
    with pytest.raises(AuthorizationError):
        container.account_service.bulk_import(instructor, "a,b,c,student")


def test_create_parent_links_existing_student(container, admin):
    user = container.account_service.create_account(
        admin, username="parent002", password="pw1234", name="保護者 三郎", role="parent", children_ids=["3"]
    )

    assert user.is_parent_of("3")
    assert container.users_repo.get_by_username("parent002").children_ids == ("3",)


def test_create_parent_with_unknown_child_fails(container, admin):
    with pytest.raises(NotFoundError):
        container.account_service.create_account(
            admin, username="p", password="pw", name="n", role="parent", children_ids=["999"]
        )


def test_username_must_be_unique(container, admin):
    with pytest.raises(ValidationError):
        container.account_service.create_account(admin, username="student001", password="x", name="n", role="student")

    with pytest.raises(ValidationError):
        container.account_service.update_account(
            admin, "2", username="student001", password=None, name="指導員 花子", role="instructor"
        )


def test_update_with_empty_password_keeps_old_one(container, admin):
    container.account_service.update_account(
        admin, "3", username="student001", password="", name="生徒 一郎 (改)", role="student", grade="6年"
    )

    user = container.auth_service.authenticate("student001", "student123")
    assert user.name == "生徒 一郎 (改)"
    assert user.grade == "6年"


def test_admin_cannot_delete_self(container, admin):
    with pytest.raises(ValidationError):
        container.account_service.delete_account(admin, admin.id)

    with pytest.raises(NotFoundError):
        container.account_service.delete_account(admin, "999")

    container.account_service.delete_account(admin, "4")
    assert container.users_repo.get_by_id("4") is None


def test_bulk_import_creates_all_lines(container, admin):
    created = container.account_service.bulk_import(
        admin,
        "student002,pass02,生徒 二郎,student\n\ninstructor002,pass03,指導員 三郎,instructor\n",
    )

    assert [u.username for u in created] == ["student002", "instructor002"]
    assert container.users_repo.get_by_username("instructor002").role == Role.INSTRUCTOR
    assert container.auth_service.authenticate("student002", "pass02").name == "生徒 二郎"


def test_bulk_import_is_all_or_nothing(container, admin):
    before = len(container.users_repo.list_all())
    text = "\n".join(
        [
            "ok001,pw,ok,student",
            "short,line",
            "bad001,pw,bad,coach",
            "student001,pw,dup,student",
            "ok001,pw,dup in batch,student",
        ]
    )

    with pytest.raises(ValidationError) as exc:
        container.account_service.bulk_import(admin, text)

    message = str(exc.value)
    assert "行2: データが不足しています" in message
    assert "行3: 無効な役割です (coach)" in message
    assert "行4: ユーザーID student001 は既に存在します" in message
    assert "行5: ユーザーID ok001 は既に存在します" in message
    assert len(container.users_repo.list_all()) == before


@pytest.mark.parametrize("line", [",,,student", "student009,,生徒,student", ",pw,生徒,student", "student009,pw,,student"])
def test_bulk_import_rejects_blank_fields(container, admin, line):
    before = len(container.users_repo.list_all())

    with pytest.raises(ValidationError, match="行1: データが不足しています"):
        container.account_service.bulk_import(admin, line)

    assert len(container.users_repo.list_all()) == before
