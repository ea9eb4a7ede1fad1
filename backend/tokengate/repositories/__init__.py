"""Repository package exposing persistence-layer access for all models."""

from __future__ import annotations

from tokengate.repositories.account import AccountRepository
from tokengate.repositories.base import BaseRepository
from tokengate.repositories.refresh_session import RefreshSessionRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "RefreshSessionRepository",
]
