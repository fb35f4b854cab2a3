from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """An authenticated account as reported by the identity provider."""

    uid: str
    email: str
