from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the identity provider rejects credentials or cannot be reached."""


class StoreError(DomainError):
    """Raised when a document store read or write fails."""


class MalformedDocumentError(StoreError):
    """Raised when a stored document does not match its expected shape."""


class ProfileWriteError(DomainError):
    """The account was created but its profile document could not be written."""

    def __init__(self, identity, message: str):
        super().__init__(message)
        self.identity = identity
