from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import Role
from ..core.exceptions import MalformedDocumentError
from ..identity.model import Identity


@dataclass(frozen=True)
class UserProfile:
    """Entitas domain: profil pengguna (dokumen ``users/<uid>``)."""

    uid: str
    email: str
    name: str
    role: Role
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def fallback(cls, identity: Identity) -> "UserProfile":
        """Transient profile for an identity without a stored document. Never persisted."""
        return cls(uid=identity.uid, email=identity.email, name=identity.email, role=Role.TEACHER)

    @classmethod
    def from_document(cls, uid: str, data: dict[str, Any]) -> "UserProfile":
        email = data.get("email")
        name = data.get("name")
        role = data.get("role")

        if not isinstance(email, str) or not isinstance(name, str):
            raise MalformedDocumentError(f"users/{uid}: email and name must be strings")
        try:
            role = Role(role)
        except ValueError:
            raise MalformedDocumentError(f"users/{uid}: unknown role {role!r}")

        created_at = data.get("createdAt")
        return cls(
            uid=uid,
            email=email,
            name=name,
            role=role,
            created_at=created_at if isinstance(created_at, datetime) else None,
        )
