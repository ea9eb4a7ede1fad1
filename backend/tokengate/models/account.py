"""Account model: the credential-bearing identity gated by activation."""

from __future__ import annotations

from sqlalchemy import Boolean, String, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column, validates

from tokengate.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Account(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account.

    Lifecycle
    ---------
    Created unverified (``is_activated = False``) by registration and flipped
    to activated by the activation workflow. The activation link is set once
    at creation and never cleared. Accounts are never deleted by the service
    layer.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Output of the credential hasher; the plaintext is never stored.
    activation_link : str
        Opaque UUID proving control of the email address. Unique.
    is_activated : bool
        Activation flag.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    activation_link: Mapped[str] = mapped_column(String(64), nullable=False)
    is_activated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        UniqueConstraint("activation_link", name="uq_accounts_activation_link"),
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = normalize_email(value)
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("password_hash")
    def _require_hash(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value:
            raise ValueError("Password hash must be a non-empty string.")
        return value


def normalize_email(email: str) -> str:
    """Return the canonical form under which emails are stored and looked up."""
    return email.strip().lower()
