from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def create(self, record: NewAttendance) -> str:
        """Persist with a server-assigned ``createdAt``; returns the document id."""

        raise NotImplementedError

    def get_recent_for_user(self, uid: str, limit: int) -> Sequence[AttendanceRecord]:
        """Newest first by ``createdAt``."""

        raise NotImplementedError

    def exists_for_user_and_date(self, uid: str, date_str: str) -> bool:
        raise NotImplementedError

    def get_in_date_range(self, *, start: str, end: str) -> Sequence[AttendanceRecord]:
        """Records with ``start <= dateStr <= end``, by ``dateStr`` desc then ``createdAt`` desc."""

        raise NotImplementedError
