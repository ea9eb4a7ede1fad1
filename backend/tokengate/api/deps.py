"""Shared API helpers for responses, cookies and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import verify_jwt_in_request

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ---------------------------- refresh cookie ------------------------------ #


def _cookie_name() -> str:
    return str(current_app.config.get("REFRESH_COOKIE_NAME", "refresh_token"))


def read_refresh_token(payload: dict[str, Any] | None = None) -> str | None:
    """
    Return the refresh token presented by the client.

    A token sent explicitly in the JSON body takes precedence over the
    ``refresh_token`` cookie, which is the fallback for browser clients.
    """

    if payload and payload.get("refresh_token"):
        return str(payload["refresh_token"])
    return request.cookies.get(_cookie_name()) or None


def set_refresh_cookie(response: Response, refresh_token: str) -> Response:
    """Attach ``refresh_token`` as an HttpOnly cookie living as long as the token."""

    max_age = int(current_app.config.get("JWT_REFRESH_TTL_DAYS", 30)) * 24 * 60 * 60
    response.set_cookie(
        _cookie_name(),
        refresh_token,
        max_age=max_age,
        httponly=True,
        secure=bool(current_app.config.get("REFRESH_COOKIE_SECURE", False)),
        samesite="Lax",
    )
    return response


def clear_refresh_cookie(response: Response) -> Response:
    response.delete_cookie(
        _cookie_name(),
        httponly=True,
        secure=bool(current_app.config.get("REFRESH_COOKIE_SECURE", False)),
        samesite="Lax",
    )
    return response
