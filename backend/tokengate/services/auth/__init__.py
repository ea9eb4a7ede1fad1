"""Auth orchestration: register, login, activate, logout and refresh."""

from .dto import AuthResult
from .service import AuthService

__all__ = ["AuthResult", "AuthService"]
