from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError

_MONTHS_ID = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")
_DAYS_ID = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
_MONTHS_ID_LONG = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


def get_timezone(name: str | None) -> Optional[tzinfo]:
    """Resolve an IANA zone name; empty means the system local zone."""
    if not name:
        return None
    return ZoneInfo(name)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def to_date_str(value: datetime | date) -> str:
    """Calendar date of ``value`` as YYYY-MM-DD (in the zone ``value`` carries)."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%Y-%m-%d")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Tanggal tidak valid: {value!r} (format YYYY-MM-DD)")


def format_timestamp(value: Any, tz: Optional[tzinfo] = None) -> str:
    """Render a stored timestamp like ``19 Okt 2026 07.31``; ``-`` when missing."""
    if not value:
        return "-"
    if isinstance(value, datetime):
        dt = value
    elif hasattr(value, "to_datetime"):
        dt = value.to_datetime()
    else:
        dt = datetime.fromisoformat(str(value))

    if dt.tzinfo is not None:
        dt = dt.astimezone(tz) if tz is not None else dt.astimezone()
    return f"{dt.day} {_MONTHS_ID[dt.month - 1]} {dt.year} {dt:%H}.{dt:%M}"


def time_of_day(formatted: str) -> str:
    """Best-effort time part of a :func:`format_timestamp` string."""
    parts = formatted.split(" ")
    if len(parts) > 3 and parts[3]:
        return parts[3]
    return formatted


def format_clock(value: datetime) -> str:
    return f"{value:%H}.{value:%M}"


def format_long_date(value: datetime | date) -> str:
    """``Senin, 19 Oktober 2026``."""
    return f"{_DAYS_ID[value.weekday()]}, {value.day} {_MONTHS_ID_LONG[value.month - 1]} {value.year}"
