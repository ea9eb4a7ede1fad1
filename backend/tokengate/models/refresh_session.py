"""Refresh session model backing the SQL session store."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tokengate.core.extensions import db

from .account import Account
from .base import PKMixin, ReprMixin, TimestampMixin


class RefreshSession(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    The single currently valid refresh token of an account.

    Fields
    ------
    account_id : int
        Owner account. Unique: at most one session row per account.
    token_hash : str
        SHA-256 hex digest of the refresh token. Unique across rows.
    """

    __tablename__ = "refresh_sessions"

    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    account: Mapped[Account] = relationship(Account, lazy="joined")

    __table_args__ = (
        UniqueConstraint("account_id", name="uq_refresh_sessions_account_id"),
        UniqueConstraint("token_hash", name="uq_refresh_sessions_token_hash"),
    )
