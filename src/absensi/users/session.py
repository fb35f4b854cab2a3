from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.exceptions import StoreError
from ..identity.model import Identity
from .model import UserProfile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    identity: Optional[Identity] = None
    profile: Optional[UserProfile] = None
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None and self.profile is not None


class SessionResolver:
    """Use case: turn an auth-state transition into a resolved profile."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def resolve(self, identity: Optional[Identity]) -> SessionState:
        if identity is None:
            return SessionState(loading=False)

        try:
            profile = self._profiles.get_by_uid(identity.uid)
        except StoreError:
            # Non-fatal: the user stays signed in but without a profile.
            logger.exception("Profile fetch error for uid=%s", identity.uid)
            return SessionState(identity=identity, profile=None, loading=False)

        if profile is None:
            profile = UserProfile.fallback(identity)
        return SessionState(identity=identity, profile=profile, loading=False)


Listener = Callable[[SessionState], None]


class SessionContext:
    """Observable holder of the current session.

    Lifecycle: ``start()`` -> ``on_auth_state_changed(...)`` for every provider
    transition -> ``close()``.
    """

    def __init__(self, resolver: SessionResolver):
        self._resolver = resolver
        self._state = SessionState()
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def state(self) -> SessionState:
        return self._state

    def start(self) -> "SessionContext":
        self._state = SessionState()
        self._closed = False
        return self

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_auth_state_changed(self, identity: Optional[Identity]) -> SessionState:
        if self._closed:
            return self._state
        self._state = self._resolver.resolve(identity)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()
