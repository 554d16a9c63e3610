from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import current_user, json_body, make_guards, ok
from ..container import Container
from ..core.enums import FAMILY_ROLES, STAFF_ROLES, Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    shifts = container.shift_service

    def _fields(data: dict) -> dict:
        return dict(
            instructor_id=data.get("instructor_id", ""),
            work_date=data.get("date", ""),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            activity=data.get("activity", ""),
        )

    @app.route("/api/shifts", endpoint="api_shifts")
    @roles_required(STAFF_ROLES)
    def api_shifts():
        week = request.args.get("week")
        try:
            anchor = parse_iso_date(week) if week else now_local().date()
        except ValueError:
            raise ValidationError("日付の形式が正しくありません (YYYY-MM-DD)")

        days = shifts.week(current_user(), week_start=anchor)
        return ok(
            week_start=days[0].date.isoformat(),
            days=[
                {"date": d.date.isoformat(), "label": d.label, "shifts": [s.to_view() for s in d.shifts]}
                for d in days
            ],
        )

    @app.route("/api/shifts/<shift_id>", endpoint="api_shift_detail")
    @roles_required(STAFF_ROLES)
    def api_shift_detail(shift_id: str):
        return ok(shift=shifts.get(current_user(), shift_id).to_view())

    @app.route("/api/shifts", methods=["POST"], endpoint="api_shift_create")
    @roles_required({Role.ADMIN})
    def api_shift_create():
        shift = shifts.create(current_user(), **_fields(json_body()))
        return ok(201, shift=shift.to_view())

    @app.route("/api/shifts/<shift_id>", methods=["PUT"], endpoint="api_shift_update")
    @roles_required({Role.ADMIN})
    def api_shift_update(shift_id: str):
        shift = shifts.update(current_user(), shift_id, **_fields(json_body()))
        return ok(shift=shift.to_view())

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="api_shift_delete")
    @roles_required({Role.ADMIN})
    def api_shift_delete(shift_id: str):
        shifts.delete(current_user(), shift_id)
        return ok()

    @app.route("/api/schedule", endpoint="api_schedule")
    @roles_required(FAMILY_ROLES, "このページは生徒・保護者のみ閲覧できます")
    def api_schedule():
        view = shifts.schedule(current_user(), today=now_local().date())
        return ok(
            shifts=[s.to_view() for s in view.shifts],
            grades=view.grades,
            classrooms=view.classrooms,
            user_grade=view.user_grade,
            user_classroom=view.user_classroom,
        )
