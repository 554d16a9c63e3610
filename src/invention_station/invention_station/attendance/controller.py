from __future__ import annotations

import io
import logging

from flask import Flask, request, send_file

from ..common.datetime_utils import today_iso
from ..common.web import current_user, fail, json_body, make_guards, ok
from ..container import Container
from ..core.enums import STAFF_ROLES
from .model import AttendanceRecord
from .qr_codes import user_qr_png
from .scanner import QrScanLoop, UploadedFrames

logger = logging.getLogger(__name__)

ACCESS_MESSAGE = "出席管理にアクセスする権限がありません"


def _record_view(rec: AttendanceRecord) -> dict:
    return {"user_id": rec.user_id, "user_name": rec.user_name, "timestamp": rec.timestamp}


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    attendance = container.attendance_service

    @app.route("/api/me/qr.png", endpoint="api_my_qr")
    @login_required
    def api_my_qr():
        """The caller's personal QR code (payload: user id) for check-in."""
        return send_file(io.BytesIO(user_qr_png(current_user().id)), mimetype="image/png")

    @app.route("/api/attendance", endpoint="api_attendance")
    @roles_required(STAFF_ROLES, ACCESS_MESSAGE)
    def api_attendance():
        day = request.args.get("date") or today_iso()
        records = attendance.list_for(current_user(), day=day)
        return ok(date=day, count=len(records), records=[_record_view(r) for r in records])

    @app.route("/api/attendance/roster", endpoint="api_attendance_roster")
    @roles_required(STAFF_ROLES, ACCESS_MESSAGE)
    def api_attendance_roster():
        day = request.args.get("date") or today_iso()
        roster = attendance.roster(current_user(), day=day)
        return ok(
            date=day,
            students=[
                {
                    "user_id": e.user_id,
                    "name": e.name,
                    "grade": e.grade,
                    "classroom": e.classroom,
                    "recorded": e.recorded,
                }
                for e in roster
            ],
        )

    @app.route("/api/attendance/days", endpoint="api_attendance_days")
    @roles_required(STAFF_ROLES, ACCESS_MESSAGE)
    def api_attendance_days():
        return ok(days=attendance.days(current_user()))

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_record")
    @roles_required(STAFF_ROLES, ACCESS_MESSAGE)
    def api_attendance_record():
        """Manual entry: ``{"user_id": "..."}``."""
        record = attendance.record(current_user(), str(json_body().get("user_id") or ""))
        return ok(201, record=_record_view(record), message=f"{record.user_name}さんの出席を記録しました")

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="api_attendance_scan")
    @roles_required(STAFF_ROLES, ACCESS_MESSAGE)
    def api_attendance_scan():
        """Decode uploaded camera frames (field ``frame``, repeatable) and record the first QR found."""

        blobs = [f.read() for f in request.files.getlist("frame")]
        if not blobs:
            return fail("画像がありません", 400)

        with QrScanLoop(UploadedFrames(blobs), container.qr_decoder) as loop:
            payload = loop.run()
        if not payload:
            return fail("QRコードが見つかりません", 422)

        logger.info("QR payload scanned after %d frame(s)", loop.frames_read)
        record = attendance.record(current_user(), payload)
        return ok(201, record=_record_view(record), message=f"{record.user_name}さんの出席を記録しました")

    @app.route("/api/attendance/<user_id>", methods=["DELETE"], endpoint="api_attendance_remove")
    @roles_required(STAFF_ROLES, ACCESS_MESSAGE)
    def api_attendance_remove(user_id: str):
        attendance.remove(current_user(), user_id, day=request.args.get("date") or today_iso())
        return ok()
