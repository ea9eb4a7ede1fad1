"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are stable contracts between repositories, adapters and application
services. Each authentication failure kind is a closed, typed variant carrying
a stable machine ``code`` and the HTTP ``status_code`` the API layer renders
it with (see ``tokengate/core/errors.py``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message; SQLite only reports
    the offending ``table.column``, so the column suffix of the conventional
    ``uq_<table>_<column>`` name is matched as a fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_accounts_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    if constraint_name.startswith("uq_"):
        table, _, column = constraint_name[3:].partition("_")
        return f"{table}.{column}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them using ``code`` and ``status_code``.
    """

    code: ClassVar[str] = "bad_request"
    status_code: ClassVar[int] = 400


class AuthError(ServiceError):
    """Root of the closed authentication failure taxonomy."""


# --------------------------------------------------------------------------- #
# Authentication failure kinds
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class DuplicateAccount(AuthError):
    """
    Raised when registering an email that already belongs to an account.

    :param email: Normalized email that collided.
    :type email: str
    """

    email: str

    code: ClassVar[str] = "duplicate_account"
    status_code: ClassVar[int] = 409

    def __str__(self) -> str:
        return f"An account with email {self.email} already exists"


@dataclass(slots=True)
class InvalidActivationLink(AuthError):
    """
    Raised when no account matches the presented activation link.

    :param link: The activation link that was presented.
    :type link: str
    """

    link: str

    code: ClassVar[str] = "invalid_activation_link"
    status_code: ClassVar[int] = 400

    def __str__(self) -> str:
        return "Invalid activation link"


@dataclass(slots=True)
class UnknownAccount(AuthError):
    """
    Raised when logging in with an email no account is registered under.

    :param email: Normalized email that was looked up.
    :type email: str
    """

    email: str

    code: ClassVar[str] = "unknown_account"
    status_code: ClassVar[int] = 404

    def __str__(self) -> str:
        return f"No account is registered with email {self.email}"


@dataclass(slots=True)
class BadCredentials(AuthError):
    """Raised when the presented secret does not match the stored hash."""

    code: ClassVar[str] = "bad_credentials"
    status_code: ClassVar[int] = 401

    def __str__(self) -> str:
        return "Incorrect password"


@dataclass(slots=True)
class Unauthorized(AuthError):
    """
    Raised when a refresh token is missing, invalid, expired or superseded.

    :param reason: Internal reason, logged but never shown to clients.
    :type reason: str
    """

    reason: str = field(default="invalid_refresh_token")

    code: ClassVar[str] = "unauthorized"
    status_code: ClassVar[int] = 401

    def __str__(self) -> str:
        return "User is not authorized"


@dataclass(slots=True)
class AccountNotActivated(AuthError):
    """
    Raised by login when activation is required and the account is unverified.

    :param email: Email of the unverified account.
    :type email: str
    """

    email: str

    code: ClassVar[str] = "account_not_activated"
    status_code: ClassVar[int] = 403

    def __str__(self) -> str:
        return "Account has not been activated yet"


@dataclass(slots=True)
class InternalFailure(AuthError):
    """
    Raised when hashing, storage or signing infrastructure fails.

    The message is deliberately opaque; the original exception is chained as
    ``__cause__`` for operators.
    """

    code: ClassVar[str] = "internal_failure"
    status_code: ClassVar[int] = 500

    def __str__(self) -> str:
        return "Internal error"


class NotificationError(ServiceError):
    """Raised by notification adapters when a message could not be delivered."""

    code: ClassVar[str] = "notification_failed"
    status_code: ClassVar[int] = 502


__all__ = [
    "violates",
    "ServiceError",
    "AuthError",
    "DuplicateAccount",
    "InvalidActivationLink",
    "UnknownAccount",
    "BadCredentials",
    "Unauthorized",
    "AccountNotActivated",
    "InternalFailure",
    "NotificationError",
]
