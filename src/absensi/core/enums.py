from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran pengguna, menentukan tampilan yang boleh dibuka."""

    TEACHER = "teacher"
    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Status absensi persis seperti yang disimpan di Firestore."""

    HADIR = "Hadir"
    TERLAMBAT = "Terlambat"
    IZIN = "Izin"
    SAKIT = "Sakit"
    WFH = "WFH"
    DINAS_LUAR = "Dinas Luar"


# Present/late are only ever derived from the clock.
MANUAL_STATUSES = (AttendanceStatus.IZIN, AttendanceStatus.WFH, AttendanceStatus.DINAS_LUAR)

# Roles offered by the sign-up selector.
SIGNUP_ROLES = (Role.TEACHER, Role.ADMIN)
