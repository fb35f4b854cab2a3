from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.exceptions import MalformedDocumentError

_DATE_STR = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    def to_document(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_document(cls, data: Any) -> Optional["Location"]:
        if data is None:
            return None
        if not isinstance(data, dict):
            raise MalformedDocumentError("location must be a map or null")
        lat, lng = data.get("lat"), data.get("lng")
        if isinstance(lat, bool) or isinstance(lng, bool) or not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
            raise MalformedDocumentError("location.lat/lng must be numbers")
        return cls(lat=float(lat), lng=float(lng))


@dataclass(frozen=True)
class AttendanceRecord:
    """Entitas domain: satu kali absen (dokumen koleksi ``attendance``).

    ``status`` is kept as the stored string so unknown values still show up
    in tables; compare it against :class:`AttendanceStatus` members.
    """

    record_id: str
    uid: str
    name: str
    email: str
    status: str
    manual_status: bool
    location: Optional[Location]
    created_at: Optional[datetime]
    date_str: str

    @classmethod
    def from_document(cls, record_id: str, data: dict[str, Any]) -> "AttendanceRecord":
        def _str(key: str) -> str:
            value = data.get(key)
            if not isinstance(value, str):
                raise MalformedDocumentError(f"attendance/{record_id}: {key} must be a string")
            return value

        date_str = _str("dateStr")
        if not _DATE_STR.match(date_str):
            raise MalformedDocumentError(f"attendance/{record_id}: dateStr {date_str!r} is not YYYY-MM-DD")

        status = _str("status")
        if not status:
            raise MalformedDocumentError(f"attendance/{record_id}: empty status")

        try:
            location = Location.from_document(data.get("location"))
        except MalformedDocumentError as e:
            raise MalformedDocumentError(f"attendance/{record_id}: {e}") from e

        created_at = data.get("createdAt")
        return cls(
            record_id=record_id,
            uid=_str("uid"),
            name=_str("name"),
            email=_str("email"),
            status=status,
            manual_status=bool(data.get("manualStatus", False)),
            location=location,
            created_at=created_at if isinstance(created_at, datetime) else None,
            date_str=date_str,
        )


@dataclass(frozen=True)
class NewAttendance:
    """Fields written on check-in; ``createdAt`` is assigned by the server."""

    uid: str
    name: str
    email: str
    status: str
    manual_status: bool
    location: Optional[Location]
    date_str: str

    def to_document(self) -> dict:
        return {
            "uid": self.uid,
            "name": self.name,
            "email": self.email,
            "status": self.status,
            "manualStatus": self.manual_status,
            "location": self.location.to_document() if self.location else None,
            "dateStr": self.date_str,
        }
