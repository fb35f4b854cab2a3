from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import LATE_THRESHOLD_HOUR, LATE_THRESHOLD_MINUTE
from ..core.enums import MANUAL_STATUSES, AttendanceStatus
from ..core.exceptions import ValidationError
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.manual_strategy import ManualStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_hour: int = LATE_THRESHOLD_HOUR
    late_minute: int = LATE_THRESHOLD_MINUTE

    def is_late(self, now: datetime) -> bool:
        return now.hour > self.late_hour or (now.hour == self.late_hour and now.minute >= self.late_minute)

    def for_checkin(self, *, now: datetime, status_override: Optional[str] = None) -> AttendanceStrategy:
        if status_override:
            try:
                status = AttendanceStatus(status_override)
            except ValueError:
                raise ValidationError(f"Status tidak dikenal: {status_override}")
            if status not in MANUAL_STATUSES:
                raise ValidationError(f"Status {status.value} tidak bisa dipilih manual")
            return ManualStrategy(status)

        if self.is_late(now):
            return LateStrategy()
        return PresentStrategy()
