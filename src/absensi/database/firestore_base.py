from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from ..core.exceptions import StoreError


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Translate Firestore client failures into :class:`StoreError`.

    The client message is kept, e.g. the "query requires an index" hint.
    """

    try:
        yield
    except StoreError:
        raise
    except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
        raise StoreError(f"{action}: {e}") from e


def snapshot_data(snap) -> dict:
    return snap.to_dict() or {}
