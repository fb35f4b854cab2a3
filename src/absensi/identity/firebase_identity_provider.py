from __future__ import annotations

import logging

import requests

from ..core.constants import DEFAULT_IDENTITY_TIMEOUT_SECONDS
from ..core.exceptions import AuthenticationError
from .model import Identity
from .provider import IdentityProvider

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class FirebaseIdentityProvider(IdentityProvider):
    """Firebase Authentication through the Identity Toolkit REST API.

    The Admin SDK cannot verify passwords, so sign-in and sign-up go through
    the same endpoints the web SDK uses, keyed by the project's web API key.
    """

    def __init__(self, api_key: str, *, timeout: float = DEFAULT_IDENTITY_TIMEOUT_SECONDS, session: requests.Session | None = None):
        self._api_key = api_key
        self._timeout = float(timeout)
        self._http = session or requests.Session()

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        return self._call("accounts:signInWithPassword", email, password)

    def create_account_with_password(self, email: str, password: str) -> Identity:
        return self._call("accounts:signUp", email, password)

    def _call(self, method: str, email: str, password: str) -> Identity:
        if not self._api_key:
            raise AuthenticationError("FIREBASE_API_KEY belum dikonfigurasi")

        try:
            resp = self._http.post(
                f"{IDENTITY_TOOLKIT_URL}/{method}",
                params={"key": self._api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Identity request %s failed: %s", method, e)
            raise AuthenticationError(str(e)) from e

        try:
            payload = resp.json()
        except ValueError:
            payload = {}

        if not resp.ok:
            message = (payload.get("error") or {}).get("message") or f"HTTP {resp.status_code}"
            logger.info("Identity provider rejected %s for %s: %s", method, email, message)
            raise AuthenticationError(message)

        uid = payload.get("localId")
        if not uid:
            raise AuthenticationError("Respons penyedia identitas tidak valid")

        return Identity(uid=uid, email=payload.get("email") or email)
