from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.firestore_attendance_repository import FirestoreAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import get_timezone
from .core.constants import DEFAULT_IDENTITY_TIMEOUT_SECONDS
from .database.connection import FirebaseConfig, FirestoreConnection
from .identity.firebase_identity_provider import FirebaseIdentityProvider
from .identity.provider import IdentityProvider
from .reports.service import DashboardService
from .users.firestore_profile_repository import FirestoreProfileRepository
from .users.repository import ProfileRepository
from .users.service import AuthService
from .users.session import SessionResolver


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    identity_provider: IdentityProvider

    auth_service: AuthService
    session_resolver: SessionResolver
    attendance_service: AttendanceService
    dashboard_service: DashboardService

    tz: Optional[tzinfo] = None


def wire_container(
    *,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    identity_provider: IdentityProvider,
    tz: Optional[tzinfo] = None,
    one_checkin_per_day: bool = False,
) -> Container:
    """Build services on top of the given adapters (real or in-memory)."""

    return Container(
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        identity_provider=identity_provider,
        auth_service=AuthService(identity_provider, profiles_repo),
        session_resolver=SessionResolver(profiles_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            strategy_factory=AttendanceStrategyFactory(),
            one_checkin_per_day=one_checkin_per_day,
            tz=tz,
        ),
        dashboard_service=DashboardService(attendance_repo, tz=tz),
        tz=tz,
    )


def build_container(
    *,
    firebase_config: dict,
    timezone: str = "",
    one_checkin_per_day: bool = False,
    identity_timeout: float = DEFAULT_IDENTITY_TIMEOUT_SECONDS,
) -> Container:
    config = FirebaseConfig(
        api_key=str(firebase_config.get("api_key", "")),
        project_id=str(firebase_config.get("project_id", "")),
        credentials=str(firebase_config.get("credentials", "")),
    )
    conn = FirestoreConnection.get_instance(config)

    return wire_container(
        profiles_repo=FirestoreProfileRepository(conn),
        attendance_repo=FirestoreAttendanceRepository(conn),
        identity_provider=FirebaseIdentityProvider(config.api_key, timeout=identity_timeout),
        tz=get_timezone(timezone),
        one_checkin_per_day=one_checkin_per_day,
    )
