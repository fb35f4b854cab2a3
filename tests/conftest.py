from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from absensi.attendance.model import AttendanceRecord, NewAttendance
from absensi.container import wire_container
from absensi.core.enums import Role
from absensi.core.exceptions import AuthenticationError, StoreError
from absensi.identity.model import Identity
from absensi.users.model import UserProfile


class InMemoryAttendance:
    """Stand-in for the ``attendance`` collection; ``createdAt`` ticks one minute per write."""

    def __init__(self, *, start: datetime = datetime(2026, 10, 19, 7, 0, 0)):
        self.records: list[AttendanceRecord] = []
        self._clock = start
        self._id = 0
        self.fail_reads = False
        self.fail_writes = False

    def _next_created_at(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    def add(self, **fields) -> AttendanceRecord:
        self._id += 1
        base = AttendanceRecord(
            record_id=f"rec{self._id}",
            uid="u1",
            name="Budi",
            email="budi@example.com",
            status="Hadir",
            manual_status=False,
            location=None,
            created_at=self._next_created_at(),
            date_str="2026-10-19",
        )
        rec = replace(base, **fields)
        self.records.append(rec)
        return rec

    def create(self, record: NewAttendance) -> str:
        if self.fail_writes:
            raise StoreError("Gagal menyimpan absensi: 503 unavailable")
        rec = self.add(
            uid=record.uid,
            name=record.name,
            email=record.email,
            status=record.status,
            manual_status=record.manual_status,
            location=record.location,
            date_str=record.date_str,
        )
        return rec.record_id

    def get_recent_for_user(self, uid: str, limit: int):
        if self.fail_reads:
            raise StoreError("Gagal memuat riwayat absensi")
        items = [r for r in self.records if r.uid == uid]
        items.sort(key=lambda r: r.created_at or datetime.min, reverse=True)
        return items[:limit]

    def exists_for_user_and_date(self, uid: str, date_str: str) -> bool:
        return any(r.uid == uid and r.date_str == date_str for r in self.records)

    def get_in_date_range(self, *, start: str, end: str):
        if self.fail_reads:
            raise StoreError("400 The query requires an index")
        items = [r for r in self.records if start <= r.date_str <= end]
        items.sort(key=lambda r: (r.date_str, r.created_at or datetime.min), reverse=True)
        return items


class InMemoryProfiles:
    def __init__(self, profiles: Optional[dict[str, UserProfile]] = None):
        self.profiles = dict(profiles or {})
        self.fail_reads = False
        self.fail_writes = False

    def get_by_uid(self, uid: str) -> Optional[UserProfile]:
        if self.fail_reads:
            raise StoreError("Gagal memuat profil: deadline exceeded")
        return self.profiles.get(uid)

    def create_profile(self, *, uid: str, name: str, email: str, role: Role) -> None:
        if self.fail_writes:
            raise StoreError("Gagal menyimpan profil: permission denied")
        self.profiles[uid] = UserProfile(uid=uid, email=email, name=name, role=role)


class FakeIdentityProvider:
    def __init__(self):
        self.accounts: dict[str, tuple[str, str]] = {}

    def register(self, email: str, password: str, uid: str) -> None:
        self.accounts[email] = (password, uid)

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        account = self.accounts.get(email)
        if not account or account[0] != password:
            raise AuthenticationError("INVALID_LOGIN_CREDENTIALS")
        return Identity(uid=account[1], email=email)

    def create_account_with_password(self, email: str, password: str) -> Identity:
        if email in self.accounts:
            raise AuthenticationError("EMAIL_EXISTS")
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[email] = (password, uid)
        return Identity(uid=uid, email=email)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 7, 15, 0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def profiles_repo() -> InMemoryProfiles:
    return InMemoryProfiles(
        {
            "admin-1": UserProfile(uid="admin-1", email="admin@example.com", name="Ibu Admin", role=Role.ADMIN),
            "teacher-1": UserProfile(uid="teacher-1", email="guru@example.com", name="Pak Guru", role=Role.TEACHER),
        }
    )


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    provider = FakeIdentityProvider()
    provider.register("admin@example.com", "rahasia", "admin-1")
    provider.register("guru@example.com", "rahasia", "teacher-1")
    return provider


@pytest.fixture
def container(attendance_repo, profiles_repo, identity_provider):
    return wire_container(
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        identity_provider=identity_provider,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from absensi.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in_as(client, uid: str, email: str) -> None:
    with client.session_transaction() as sess:
        sess["uid"] = uid
        sess["email"] = email


@pytest.fixture
def login_as(client):
    def _login(uid: str, email: str):
        sign_in_as(client, uid, email)
        return client

    return _login
