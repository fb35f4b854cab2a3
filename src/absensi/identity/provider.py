from __future__ import annotations

from typing import Protocol

from .model import Identity


class IdentityProvider(Protocol):
    """Email/password identity operations.

    Implementations raise :class:`AuthenticationError` carrying the provider's
    message on any failure.
    """

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        raise NotImplementedError

    def create_account_with_password(self, email: str, password: str) -> Identity:
        raise NotImplementedError
