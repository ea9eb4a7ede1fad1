"""Account listing endpoint (requires a bearer access token)."""

from __future__ import annotations

from flask import Blueprint

from tokengate.api.deps import json_response, require_auth, timing
from tokengate.container import get_auth_service
from tokengate.schemas import AccountSchema

bp = Blueprint("users", __name__)

accounts_schema = AccountSchema(many=True)


@bp.get("")
@require_auth
@timing
def list_users():
    """Return every registered account."""

    accounts = get_auth_service().list_accounts()
    return json_response({"data": accounts_schema.dump(accounts)})
