import pytest
import requests

from absensi.core.exceptions import AuthenticationError
from absensi.identity.firebase_identity_provider import IDENTITY_TOOLKIT_URL, FirebaseIdentityProvider


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_sign_in_posts_credentials():
    http = FakeSession(FakeResponse(200, {"localId": "abc", "email": "guru@example.com", "idToken": "tok"}))
    provider = FirebaseIdentityProvider("key-1", timeout=3, session=http)

    identity = provider.sign_in_with_password("guru@example.com", "rahasia")

    assert identity.uid == "abc"
    url, kwargs = http.calls[0]
    assert url == f"{IDENTITY_TOOLKIT_URL}/accounts:signInWithPassword"
    assert kwargs["params"] == {"key": "key-1"}
    assert kwargs["json"] == {"email": "guru@example.com", "password": "rahasia", "returnSecureToken": True}
    assert kwargs["timeout"] == 3.0


def test_sign_up_uses_signup_endpoint():
    http = FakeSession(FakeResponse(200, {"localId": "new"}))

    identity = FirebaseIdentityProvider("key-1", session=http).create_account_with_password("baru@example.com", "x")

    assert http.calls[0][0].endswith("/accounts:signUp")
    assert identity.email == "baru@example.com"


def test_provider_error_message_is_surfaced():
    http = FakeSession(FakeResponse(400, {"error": {"code": 400, "message": "INVALID_LOGIN_CREDENTIALS"}}))

    with pytest.raises(AuthenticationError) as exc:
        FirebaseIdentityProvider("key-1", session=http).sign_in_with_password("a@b.c", "bad")

    assert str(exc.value) == "INVALID_LOGIN_CREDENTIALS"


def test_non_json_error_uses_status_code():
    http = FakeSession(FakeResponse(502, None))

    with pytest.raises(AuthenticationError, match="HTTP 502"):
        FirebaseIdentityProvider("key-1", session=http).sign_in_with_password("a@b.c", "x")


def test_network_error_becomes_authentication_error():
    http = FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(AuthenticationError, match="connection refused"):
        FirebaseIdentityProvider("key-1", session=http).sign_in_with_password("a@b.c", "x")


def test_missing_api_key_fails_before_request():
    http = FakeSession(FakeResponse(200, {"localId": "abc"}))

    with pytest.raises(AuthenticationError):
        FirebaseIdentityProvider("", session=http).sign_in_with_password("a@b.c", "x")

    assert http.calls == []


def test_missing_local_id_is_rejected():
    http = FakeSession(FakeResponse(200, {"email": "a@b.c"}))

    with pytest.raises(AuthenticationError):
        FirebaseIdentityProvider("key-1", session=http).sign_in_with_password("a@b.c", "x")
