from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import status_badge
from ..common.datetime_utils import format_timestamp, parse_iso_date, time_of_day, to_date_str
from ..core.constants import DASHBOARD_LOAD_ERROR
from ..core.enums import AttendanceStatus
from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)

MAPS_URL = "https://www.google.com/maps?q={lat},{lng}"

# (chart label, exact stored status, bar color)
STATUS_BUCKETS: tuple[tuple[str, str, str], ...] = (
    ("Hadir", AttendanceStatus.HADIR.value, "#22c55e"),
    ("Terlambat", AttendanceStatus.TERLAMBAT.value, "#eab308"),
    ("Izin", AttendanceStatus.IZIN.value, "#3b82f6"),
    ("Sakit", AttendanceStatus.SAKIT.value, "#ef4444"),
    ("WFH", AttendanceStatus.WFH.value, "#8b5cf6"),
    ("Dinas", AttendanceStatus.DINAS_LUAR.value, "#f97316"),
)

CSV_FIELDS = ["Nama", "Email", "Status", "Tanggal", "Waktu", "Latitude", "Longitude"]


@dataclass(frozen=True)
class DashboardData:
    start: str
    end: str
    records: list[AttendanceRecord] = field(default_factory=list)
    error: Optional[str] = None


def tally(records: Sequence[AttendanceRecord]) -> list[dict]:
    """Count records per chart bucket by exact status match.

    Statuses outside the buckets are not counted (they still show in the table).
    """

    counts = {status: 0 for _, status, _ in STATUS_BUCKETS}
    for r in records:
        if r.status in counts:
            counts[r.status] += 1
    return [{"name": label, "value": counts[status], "color": color} for label, status, color in STATUS_BUCKETS]


def map_link(record: AttendanceRecord) -> Optional[str]:
    if not record.location:
        return None
    return MAPS_URL.format(lat=record.location.lat, lng=record.location.lng)


class DashboardService:
    """Use case: admin recap over a date range (table, chart, CSV)."""

    def __init__(self, attendance: AttendanceRepository, *, tz: Optional[tzinfo] = None):
        self._attendance = attendance
        self._tz = tz
        # Last successful load per admin uid, shown again when a query fails.
        self._last_loaded: dict[str, DashboardData] = {}

    def default_range(self, today) -> tuple[str, str]:
        today_s = to_date_str(today)
        return today_s, today_s

    def last_loaded(self, viewer_uid: str) -> Optional[DashboardData]:
        return self._last_loaded.get(viewer_uid)

    def loaded_for(self, viewer_uid: str, *, start: str, end: str) -> Optional[DashboardData]:
        """The remembered load for exactly this range, if any."""
        data = self._last_loaded.get(viewer_uid)
        if data is None or (data.start, data.end) != (start, end):
            return None
        return data

    def build_dashboard(self, *, viewer_uid: str, start: str, end: str) -> DashboardData:
        start = parse_iso_date(start).strftime("%Y-%m-%d")
        end = parse_iso_date(end).strftime("%Y-%m-%d")

        try:
            records = list(self._attendance.get_in_date_range(start=start, end=end))
        except StoreError:
            logger.exception("Dashboard query failed for %s..%s", start, end)
            previous = self._last_loaded.get(viewer_uid)
            if previous is None:
                return DashboardData(start=start, end=end, error=DASHBOARD_LOAD_ERROR)
            return DashboardData(start=previous.start, end=previous.end, records=previous.records, error=DASHBOARD_LOAD_ERROR)

        data = DashboardData(start=start, end=end, records=records)
        self._last_loaded[viewer_uid] = data
        return data

    def table_rows(self, data: DashboardData) -> list[dict]:
        rows = []
        for r in data.records:
            formatted = format_timestamp(r.created_at, self._tz)
            rows.append(
                {
                    "id": r.record_id,
                    "name": r.name,
                    "date": r.date_str,
                    "time": time_of_day(formatted),
                    "status": r.status,
                    "css_class": status_badge(r.status),
                    "map_url": map_link(r),
                }
            )
        return rows

    def csv_rows(self, records: Sequence[AttendanceRecord]) -> list[dict]:
        return [
            {
                "Nama": r.name,
                "Email": r.email,
                "Status": r.status,
                "Tanggal": r.date_str,
                "Waktu": format_timestamp(r.created_at, self._tz),
                "Latitude": r.location.lat if r.location else "",
                "Longitude": r.location.lng if r.location else "",
            }
            for r in records
        ]

    def export_csv(self, data: DashboardData) -> bytes:
        """CSV of the already loaded records (no new query)."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in self.csv_rows(data.records):
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")

    @staticmethod
    def export_filename(data: DashboardData) -> str:
        return f"absensi_{data.start}_{data.end}.csv"
