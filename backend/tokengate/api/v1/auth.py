"""Authentication endpoints delegating to the auth orchestrator."""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, request

from tokengate.api.deps import (
    clear_refresh_cookie,
    json_response,
    read_refresh_token,
    set_refresh_cookie,
    timing,
)
from tokengate.container import get_auth_service
from tokengate.schemas import (
    AuthResultSchema,
    CredentialsSchema,
    RefreshTokenSchema,
)
from tokengate.services.auth.dto import AuthResult

bp = Blueprint("auth", __name__)

credentials_schema = CredentialsSchema()
refresh_token_schema = RefreshTokenSchema()
auth_result_schema = AuthResultSchema()


def _token_response(result: AuthResult, *, status: int = 200):
    body = {"data": auth_result_schema.dump(result.as_dict())}
    if result.warnings:
        body["warnings"] = list(result.warnings)
    response = json_response(body, status=status)
    return set_refresh_cookie(response, result.tokens.refresh_token)


@bp.post("/registration")
@timing
def registration():
    """Create an account, mail its activation link and sign it in."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    result = get_auth_service().register(data["email"], data["password"])
    return _token_response(result, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    result = get_auth_service().login(data["email"], data["password"])
    return _token_response(result)


@bp.post("/logout")
@timing
def logout():
    """Drop the refresh session and clear the refresh cookie."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    token = read_refresh_token(data)
    removed = get_auth_service().logout(token or "")
    response = json_response({"data": {"removed": removed is not None}})
    return clear_refresh_cookie(response)


@bp.get("/activate/<string:link>")
@timing
def activate(link: str):
    """Activate the account owning ``link``; redirect to the client when configured."""

    get_auth_service().activate(link)
    client_url = current_app.config.get("CLIENT_URL")
    if client_url:
        return redirect(client_url)
    return json_response({"data": {"activated": True}})


@bp.route("/refresh", methods=["GET", "POST"])
@timing
def refresh():
    """Rotate the refresh token (cookie or JSON body) and issue a new pair."""

    payload = request.get_json(silent=True) if request.method == "POST" else None
    data = refresh_token_schema.load(payload or {})
    result = get_auth_service().refresh(read_refresh_token(data))
    return _token_response(result)
