from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import UserProfile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Services depend on this interface, not on Firestore directly.
    """

    def get_by_uid(self, uid: str) -> Optional[UserProfile]:
        """Stored profile, or ``None`` when the document does not exist."""

        raise NotImplementedError

    def create_profile(self, *, uid: str, name: str, email: str, role: Role) -> None:
        raise NotImplementedError
