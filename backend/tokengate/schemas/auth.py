"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class CredentialsSchema(Schema):
    """Input payload for registration and login."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshTokenSchema(Schema):
    """Optional refresh token in the body (the cookie takes precedence)."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(load_default=None, allow_none=True)


class IdentitySchema(Schema):
    """Identity projection embedded in tokens and returned to clients."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    is_activated = fields.Boolean(required=True)


class AuthResultSchema(Schema):
    """Response payload of every token-issuing endpoint."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    user = fields.Nested(IdentitySchema, required=True)
