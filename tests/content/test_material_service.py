from __future__ import annotations

import pytest

from src.invention_station.invention_station.core.enums import Role
from src.invention_station.invention_station.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_materials_filtered_by_audience(container, student, parent, admin):
    materials = container.material_service

    assert [m.id for m in materials.list_visible(student)] == ["1", "2"]
    assert [m.id for m in materials.list_visible(admin)] == ["3"]
    assert materials.list_visible(parent) == []


def test_category_filter_and_categories(container, instructor):
    materials = container.material_service

    assert [m.id for m in materials.list_visible(instructor, category="電子工作")] == ["2"]
    assert len(materials.list_visible(instructor, category="all")) == 3
    assert materials.categories() == ["ロボティクス", "電子工作", "指導資料"]


def test_get_checks_audience(container, student):
    materials = container.material_service

    assert materials.get(student, "1").title == "ロボット工作基礎"
    with pytest.raises(AuthorizationError):
        materials.get(student, "3")
    with pytest.raises(NotFoundError):
        materials.get(student, "999")


def test_staff_crud(container, instructor, student, fixed_now):
    materials = container.material_service

    created = materials.create(
        instructor,
        title=" 3Dプリンタ入門 ",
        category="ものづくり",
        target_audience=["student", "student", "parent"],
        now=fixed_now,
    )
    assert created.title == "3Dプリンタ入門"
    assert created.target_audience == (Role.STUDENT, Role.PARENT)
    assert created.created_at == "2025-11-10"
    assert created.file_url is None

    updated = materials.update(instructor, created.id, title="3Dプリンタ応用", target_audience=["student"])
    assert materials.get(student, created.id).title == "3Dプリンタ応用"
    assert updated.created_at == "2025-11-10"

    materials.delete(instructor, created.id)
    with pytest.raises(NotFoundError):
        materials.get(student, created.id)


def test_students_cannot_edit_and_title_required(container, student, admin):
    materials = container.material_service

    with pytest.raises(AuthorizationError):
        materials.create(student, title="x")
    with pytest.raises(ValidationError):
        materials.create(admin, title="  ")
    with pytest.raises(ValidationError):
        materials.create(admin, title="x", target_audience=["coach"])
