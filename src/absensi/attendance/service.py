from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from ..common.datetime_utils import format_timestamp, now_local, to_date_str
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..identity.model import Identity
from ..users.model import UserProfile
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, Location, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def status_badge(status: str) -> str:
    """CSS for a status pill: green present, yellow late, blue for the rest."""
    if status == AttendanceStatus.HADIR:
        return "bg-success"
    if status == AttendanceStatus.TERLAMBAT:
        return "bg-warning text-dark"
    return "bg-primary"


@dataclass(frozen=True)
class CheckInResult:
    record_id: str
    record: NewAttendance

    @property
    def message(self) -> str:
        return f"Berhasil absen: {self.record.status}"


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        one_checkin_per_day: bool = False,
        tz: Optional[tzinfo] = None,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._history_limit = int(history_limit)
        self._one_per_day = bool(one_checkin_per_day)
        self._tz = tz

    def check_in(
        self,
        *,
        identity: Identity,
        profile: UserProfile,
        location: Optional[Location],
        status_override: Optional[str] = None,
        now: datetime | None = None,
    ) -> CheckInResult:
        now = now or now_local(self._tz)
        date_str = to_date_str(now)

        strategy = self._factory.for_checkin(now=now, status_override=status_override)
        decision = strategy.decide_checkin(now=now)

        if self._one_per_day and self._attendance.exists_for_user_and_date(identity.uid, date_str):
            raise ValidationError("Anda sudah absen hari ini")

        record = NewAttendance(
            uid=identity.uid,
            name=profile.name or identity.email,
            email=identity.email,
            status=decision.status.value,
            manual_status=decision.manual,
            location=location,
            date_str=date_str,
        )
        record_id = self._attendance.create(record)
        logger.info(
            "Check-in %s uid=%s status=%s manual=%s located=%s",
            record_id, identity.uid, record.status, record.manual_status, location is not None,
        )
        return CheckInResult(record_id=record_id, record=record)

    def get_history(self, uid: str) -> list[AttendanceRecord]:
        return list(self._attendance.get_recent_for_user(uid, self._history_limit))

    def get_history_ui(self, uid: str) -> list[dict]:
        return [self._to_ui(r) for r in self.get_history(uid)]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "id": r.record_id,
            "time": format_timestamp(r.created_at, self._tz),
            "status": r.status,
            "css_class": status_badge(r.status),
            "location": f"{r.location.lat:.4f}, {r.location.lng:.4f}" if r.location else "N/A",
        }
