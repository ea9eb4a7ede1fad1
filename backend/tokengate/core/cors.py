"""CORS policy for the API, aligned with the refresh-token cookie."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask
from flask_cors import CORS

from tokengate.core.logger import REQUEST_ID_HEADER

log = logging.getLogger(__name__)

API_RESOURCES = r"/api/*"


def cors_policy(config: Mapping[str, Any]) -> dict[str, Any]:
    """
    Build the Flask-Cors options for ``/api/*``.

    Browsers only send the ``REFRESH_COOKIE_NAME`` cookie cross-origin when
    the response allows credentials, and credentials are only allowed for an
    explicit origin list. A blank ``CORS_ORIGINS`` or ``"*"`` yields an
    any-origin policy under which the refresh token must travel in the body.

    :param config: Application config (or any mapping with the same keys).
    :returns: Keyword arguments for :class:`flask_cors.CORS`.
    """
    raw_origins = config.get("CORS_ORIGINS", "") or ""
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    return {
        "resources": {API_RESOURCES: {"origins": "*" if wildcard else origins}},
        "supports_credentials": not wildcard,
        "allow_headers": ["Authorization", "Content-Type", REQUEST_ID_HEADER],
        "expose_headers": [REQUEST_ID_HEADER],
        "max_age": config.get("CORS_MAX_AGE", 600),
    }


def init_app(app: Flask) -> None:
    """Apply :func:`cors_policy` to ``app``."""
    policy = cors_policy(app.config)
    if not policy["supports_credentials"]:
        log.warning(
            "cors.cookie_disabled",
            extra={"reason": f"{app.config.get('REFRESH_COOKIE_NAME', 'refresh_token')} not sent cross-origin"},
        )
    CORS(app, **policy)
