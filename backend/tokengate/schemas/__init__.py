"""Marshmallow schemas for request validation and response shaping."""

from .account import AccountSchema
from .auth import AuthResultSchema, CredentialsSchema, IdentitySchema, RefreshTokenSchema

__all__ = [
    "AccountSchema",
    "AuthResultSchema",
    "CredentialsSchema",
    "IdentitySchema",
    "RefreshTokenSchema",
]
