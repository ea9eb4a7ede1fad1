"""Account state machine: creation, activation and authentication."""

from .dto import AccountOut
from .service import AccountService

__all__ = ["AccountOut", "AccountService"]
