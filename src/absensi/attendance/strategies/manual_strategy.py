from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class ManualStrategy(AttendanceStrategy):
    """Status picked by the user (Izin / WFH / Dinas Luar); the clock is ignored."""

    def __init__(self, status: AttendanceStatus):
        self._status = status

    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=self._status, manual=True)
