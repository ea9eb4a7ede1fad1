"""Account listing schema."""

from __future__ import annotations

from marshmallow import Schema, fields


class AccountSchema(Schema):
    """Public view of an account; the activation link is never exposed."""

    id = fields.Integer(dump_only=True)
    email = fields.Email(dump_only=True)
    is_activated = fields.Boolean(dump_only=True)
    created_at = fields.DateTime(dump_only=True, allow_none=True)
