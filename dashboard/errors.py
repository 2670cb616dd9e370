"""Exception types raised across the invoice mutation pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from sqlalchemy.exc import DataError, IntegrityError, OperationalError

if TYPE_CHECKING:
    from dashboard.schemas import ValidationIssue


class InvoiceValidationError(Exception):
    """Raised by strict schema parsing when the submitted fields are invalid."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{'.'.join(i.path)}: {i.message}" for i in self.issues)
        super().__init__(summary or "Invalid invoice data")


class PersistenceError(Exception):
    """A failed SQL statement.

    ``kind`` is meant for logs, ``message`` is safe to show to users.
    """

    UNKNOWN = "unknown"
    INTEGRITY = "integrity"
    UNAVAILABLE = "unavailable"
    INVALID_DATA = "invalid_data"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def from_exception(cls, error: Exception, message: str) -> "PersistenceError":
        if isinstance(error, IntegrityError):
            kind = cls.INTEGRITY
        elif isinstance(error, OperationalError):
            kind = cls.UNAVAILABLE
        elif isinstance(error, (DataError, ArithmeticError)):
            kind = cls.INVALID_DATA
        else:
            kind = cls.UNKNOWN
        return cls(kind, message)


class AuthError(Exception):
    """Classified sign-in failure; ``type`` names the failure."""

    type = "AuthError"

    def __init__(self, type: str | None = None, message: str | None = None):
        if type is not None:
            self.type = type
        super().__init__(message or self.type)


class CredentialsSignin(AuthError):
    """The submitted e-mail/password pair was rejected."""

    type = "CredentialsSignin"


class AccessDenied(AuthError):
    """The account exists but may not sign in."""

    type = "AccessDenied"
