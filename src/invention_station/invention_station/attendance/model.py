from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceRecord:
    """One check-in for one day. ``timestamp`` is an ISO datetime string."""

    user_id: str
    user_name: str
    timestamp: str


@dataclass(frozen=True)
class RosterEntry:
    user_id: str
    name: str
    grade: str | None
    classroom: str | None
    recorded: bool
