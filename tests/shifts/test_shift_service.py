from __future__ import annotations

from datetime import date

import pytest

from src.invention_station.invention_station.common.datetime_utils import week_start_for
from src.invention_station.invention_station.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_week_start_is_monday():
    assert week_start_for(date(2025, 11, 15)) == date(2025, 11, 10)
    assert week_start_for(date(2025, 11, 10)) == date(2025, 11, 10)
    assert week_start_for(date(2025, 11, 16)) == date(2025, 11, 10)


def test_week_view_groups_shifts_by_day(container, instructor):
    days = container.shift_service.week(instructor, week_start=date(2025, 11, 13))

    assert [d.date for d in days][0] == date(2025, 11, 10)
    assert [d.label for d in days] == ["月", "火", "水", "木", "金", "土", "日"]
    saturday = days[5]
    assert [s.activity for s in saturday.shifts] == ["ロボット工作"]
    assert sum(len(d.shifts) for d in days) == 1


def test_week_view_is_staff_only(container, student):
    with pytest.raises(AuthorizationError):
        container.shift_service.week(student, week_start=date(2025, 11, 10))


def test_upcoming_sorted_and_limited(container, admin):
    shifts = container.shift_service
    shifts.create(admin, instructor_id="2", work_date="2025-11-12", start_time="10:00", end_time="12:00")

    upcoming = shifts.upcoming(today=date(2025, 11, 12), limit=2)
    assert [s.date for s in upcoming] == ["2025-11-12", "2025-11-15"]
    assert shifts.upcoming(today=date(2025, 11, 21)) == []


def test_create_denormalises_instructor_name(container, admin):
    shift = container.shift_service.create(
        admin, instructor_id="1", work_date="2025-12-01", start_time="09:00", end_time="10:30", activity="準備"
    )

    assert shift.instructor_name == "管理者 太郎"


@pytest.mark.parametrize(
    "fields,error",
    [
        (dict(instructor_id="3"), NotFoundError),
        (dict(instructor_id="999"), NotFoundError),
        (dict(work_date="2025/12/01"), ValidationError),
        (dict(start_time="9"), ValidationError),
        (dict(end_time="08:00"), ValidationError),
    ],
)
def test_create_validation(container, admin, fields, error):
    args = dict(instructor_id="2", work_date="2025-12-01", start_time="09:00", end_time="10:00")
    args.update(fields)

    with pytest.raises(error):
        container.shift_service.create(admin, **args)


def test_only_admin_edits_shifts(container, instructor, admin):
    shifts = container.shift_service

    with pytest.raises(AuthorizationError):
        shifts.delete(instructor, "1")

    updated = shifts.update(
        admin, "1", instructor_id="2", work_date="2025-11-16", start_time="13:00", end_time="16:00", activity="発表会"
    )
    assert shifts.get(instructor, "1") == updated

    shifts.delete(admin, "1")
    with pytest.raises(NotFoundError):
        shifts.get(admin, "1")


def test_schedule_for_student_and_parent(container, student, parent, instructor):
    shifts = container.shift_service

    view = shifts.schedule(student, today=date(2025, 11, 16))
    assert [s.id for s in view.shifts] == ["2"]
    assert view.grades == ["5年"]
    assert view.classrooms == ["A教室"]
    assert (view.user_grade, view.user_classroom) == ("5年", "A教室")

    parent_view = shifts.schedule(parent, today=date(2025, 11, 1))
    assert parent_view.user_grade == "5年"
    assert len(parent_view.shifts) == 2

    with pytest.raises(AuthorizationError):
        shifts.schedule(instructor, today=date(2025, 11, 1))


def test_unpadded_date_and_times_are_normalised(container, admin, instructor):
    shifts = container.shift_service
    shift = shifts.create(admin, instructor_id="2", work_date="2025-11-3", start_time="9:00", end_time="9:45")

    assert (shift.date, shift.start_time, shift.end_time) == ("2025-11-03", "09:00", "09:45")

    shifts.create(admin, instructor_id="2", work_date="2025-11-03", start_time="10:00", end_time="11:00")
    monday = shifts.week(instructor, week_start=date(2025, 11, 3))[0]
    assert [s.start_time for s in monday.shifts] == ["09:00", "10:00"]

    updated = shifts.update(admin, shift.id, instructor_id="2", work_date="2025-11-4", start_time="8:5", end_time="9:00")
    assert (updated.date, updated.start_time) == ("2025-11-04", "08:05")


@pytest.mark.parametrize(
    "fields",
    [dict(work_date=20251103), dict(start_time=900), dict(end_time=["10:00"])],
)
def test_non_string_date_or_time_is_validation_error(container, admin, fields):
    args = dict(instructor_id="2", work_date="2025-12-01", start_time="09:00", end_time="10:00")
    args.update(fields)

    with pytest.raises(ValidationError):
        container.shift_service.create(admin, **args)
