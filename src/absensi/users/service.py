from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.enums import SIGNUP_ROLES, Role
from ..core.exceptions import ProfileWriteError, StoreError, ValidationError
from ..identity.model import Identity
from ..identity.provider import IdentityProvider
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign in / sign up against the identity provider."""

    def __init__(self, identity: IdentityProvider, profiles: ProfileRepository):
        self._identity = identity
        self._profiles = profiles

    def sign_in(self, email: str, password: str) -> Identity:
        # Errors from the provider are surfaced as-is, no retry.
        return self._identity.sign_in_with_password(email.strip(), password)

    def sign_up(self, *, name: str, email: str, password: str, role: str | Role) -> Identity:
        name = require_non_empty(name, "Nama lengkap")
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Peran tidak valid")
        if role not in SIGNUP_ROLES:
            raise ValidationError("Peran tidak valid")

        email = email.strip()
        identity = self._identity.create_account_with_password(email, password)

        try:
            self._profiles.create_profile(uid=identity.uid, name=name, email=email, role=role)
        except StoreError as e:
            # The account exists now; it resolves to the fallback profile until fixed by hand.
            logger.error("Account %s created but profile write failed: %s", identity.uid, e)
            raise ProfileWriteError(identity, str(e)) from e

        logger.info("Registered %s as %s", email, role.value)
        return identity
