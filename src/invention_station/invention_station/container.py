from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .app_links.json_app_link_repository import JsonAppLinkRepository
from .app_links.service import AppLinkService
from .attendance.json_attendance_repository import JsonAttendanceRepository
from .attendance.scanner import QrFrameDecoder
from .attendance.service import AttendanceService
from .core.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .database.file_kv_store import FileKeyValueStore
from .database.kv_store import KeyValueStore
from .database.mysql_kv_store import MySQLKeyValueStore
from .materials.json_material_repository import JsonMaterialRepository
from .materials.service import MaterialService
from .notes.json_note_repository import JsonInventionNoteRepository
from .notes.service import InventionNoteService
from .notices.json_notice_repository import JsonNoticeRepository
from .notices.service import NoticeService
from .shifts.json_shift_repository import JsonShiftRepository
from .shifts.service import ShiftService
from .users.json_user_repository import JsonUserRepository
from .users.service import AccountService, AuthService


@dataclass(frozen=True)
class Container:
    store: KeyValueStore

    users_repo: JsonUserRepository
    materials_repo: JsonMaterialRepository
    shifts_repo: JsonShiftRepository
    notices_repo: JsonNoticeRepository
    app_links_repo: JsonAppLinkRepository
    notes_repo: JsonInventionNoteRepository
    attendance_repo: JsonAttendanceRepository

    auth_service: AuthService
    account_service: AccountService
    material_service: MaterialService
    shift_service: ShiftService
    notice_service: NoticeService
    app_link_service: AppLinkService
    note_service: InventionNoteService
    attendance_service: AttendanceService
    dashboard_service: DashboardService

    qr_decoder: QrFrameDecoder


def build_store(*, backend: str, data_dir: Optional[str] = None, db_config: Optional[dict] = None) -> KeyValueStore:
    backend = (backend or "file").lower()
    if backend == "file":
        return FileKeyValueStore(data_dir or "instance/data")
    if backend == "mysql":
        return MySQLKeyValueStore(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config or {})))
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_container(
    store: KeyValueStore,
    *,
    canvas_width: int = CANVAS_WIDTH,
    canvas_height: int = CANVAS_HEIGHT,
    qr_decoder: Optional[QrFrameDecoder] = None,
) -> Container:
    users_repo = JsonUserRepository(store)
    materials_repo = JsonMaterialRepository(store)
    shifts_repo = JsonShiftRepository(store)
    notices_repo = JsonNoticeRepository(store)
    app_links_repo = JsonAppLinkRepository(store)
    notes_repo = JsonInventionNoteRepository(store)
    attendance_repo = JsonAttendanceRepository(store)

    material_service = MaterialService(materials_repo)
    shift_service = ShiftService(shifts_repo, users_repo)
    notice_service = NoticeService(notices_repo)

    return Container(
        store=store,
        users_repo=users_repo,
        materials_repo=materials_repo,
        shifts_repo=shifts_repo,
        notices_repo=notices_repo,
        app_links_repo=app_links_repo,
        notes_repo=notes_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        account_service=AccountService(users_repo),
        material_service=material_service,
        shift_service=shift_service,
        notice_service=notice_service,
        app_link_service=AppLinkService(app_links_repo),
        note_service=InventionNoteService(notes_repo, canvas_width=canvas_width, canvas_height=canvas_height),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        dashboard_service=DashboardService(
            materials=material_service,
            shifts=shift_service,
            notices=notice_service,
            users=users_repo,
        ),
        qr_decoder=qr_decoder or QrFrameDecoder(),
    )
