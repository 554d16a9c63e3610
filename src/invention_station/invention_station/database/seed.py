"""Sample data written on first start (and by scripts/seed_db.py)."""

from __future__ import annotations

from typing import Callable, Dict, List

from werkzeug.security import generate_password_hash

from ..core.constants import (
    APP_LINKS_KEY,
    INVENTION_NOTES_KEY,
    MATERIALS_KEY,
    NOTICES_KEY,
    SHIFTS_KEY,
    USERS_KEY,
)


def _users() -> List[dict]:
    def user(uid, username, password, role, name, **extra):
        rec = {
            "id": uid,
            "username": username,
            "passwordHash": generate_password_hash(password),
            "role": role,
            "name": name,
            "childrenIds": [],
        }
        rec.update(extra)
        return rec

    return [
        user("1", "admin001", "admin123", "admin", "管理者 太郎"),
        user("2", "instructor001", "inst123", "instructor", "指導員 花子"),
        user("3", "student001", "student123", "student", "生徒 一郎", grade="5年", classroom="A教室"),
        user("4", "parent001", "parent123", "parent", "保護者 次郎", childrenIds=["3"]),
    ]


def _materials() -> List[dict]:
    return [
        {
            "id": "1",
            "title": "ロボット工作基礎",
            "description": "基本的なロボット製作の手順とポイント",
            "category": "ロボティクス",
            "targetAudience": ["student", "instructor"],
            "createdAt": "2025-01-15",
        },
        {
            "id": "2",
            "title": "電子回路入門",
            "description": "電子回路の基本を学ぶ教材",
            "category": "電子工作",
            "targetAudience": ["student", "instructor"],
            "createdAt": "2025-01-20",
        },
        {
            "id": "3",
            "title": "指導マニュアル - 安全管理",
            "description": "活動時の安全管理に関する指導員向けマニュアル",
            "category": "指導資料",
            "targetAudience": ["instructor", "admin"],
            "createdAt": "2025-01-10",
        },
    ]


def _shifts() -> List[dict]:
    return [
        {
            "id": "1",
            "instructorId": "2",
            "instructorName": "指導員 花子",
            "date": "2025-11-15",
            "startTime": "14:00",
            "endTime": "17:00",
            "activity": "ロボット工作",
        },
        {
            "id": "2",
            "instructorId": "2",
            "instructorName": "指導員 花子",
            "date": "2025-11-20",
            "startTime": "14:00",
            "endTime": "17:00",
            "activity": "電子回路制作",
        },
    ]


def _notices() -> List[dict]:
    return [
        {
            "id": "1",
            "title": "発明クラブ活動再開のお知らせ",
            "content": "11月15日より通常活動を再開いたします。皆様のご参加をお待ちしております。",
            "targetAudience": ["admin", "instructor", "student", "parent"],
            "priority": "high",
            "createdAt": "2025-11-01",
            "createdBy": "管理者 太郎",
        },
        {
            "id": "2",
            "title": "新しい教材が追加されました",
            "content": "ロボティクスと電子工作の新しい教材をご用意しました。ぜひご活用ください。",
            "targetAudience": ["student", "instructor"],
            "priority": "medium",
            "createdAt": "2025-11-05",
            "createdBy": "管理者 太郎",
        },
    ]


def _app_links() -> List[dict]:
    return [
        {
            "id": "1",
            "title": "Google Classroom",
            "url": "https://classroom.google.com/",
            "icon": "google-classroom",
            "description": "課題の提出と連絡",
            "category": "学習",
        },
        {
            "id": "2",
            "title": "GitHub",
            "url": "https://github.com/",
            "icon": "github",
            "description": "作品のソースコード共有",
            "category": "リンク",
        },
    ]


DEFAULT_COLLECTIONS: Dict[str, Callable[[], List[dict]]] = {
    USERS_KEY: _users,
    MATERIALS_KEY: _materials,
    SHIFTS_KEY: _shifts,
    NOTICES_KEY: _notices,
    APP_LINKS_KEY: _app_links,
    INVENTION_NOTES_KEY: list,
}
