"""
Service wiring.

Builds the :class:`~tokengate.services.auth.service.AuthService` graph from
the application config and stores it in ``app.extensions``. Handlers and CLI
commands fetch it with :func:`get_auth_service`.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, cast

from flask import Flask, current_app

from tokengate.core.extensions import get_redis
from tokengate.infra.jwt import JWTTokenCodec
from tokengate.infra.mail import LoggingNotifier, SMTPNotifier
from tokengate.infra.redis import RedisSessionStore
from tokengate.infra.security import WerkzeugCredentialHasher
from tokengate.infra.sql import SQLSessionStore
from tokengate.services._shared.dto import TokenCodecConfig
from tokengate.services._shared.ports import (
    ActivationNotifier,
    InMemorySessionStore,
    SessionStore,
)
from tokengate.services.accounts import AccountService
from tokengate.services.auth import AuthService

log = logging.getLogger(__name__)

EXTENSION_KEY = "auth_service"


def build_codec_config(config: Any) -> TokenCodecConfig:
    """Translate flat config keys into a :class:`TokenCodecConfig`."""
    return TokenCodecConfig(
        access_secret=config["JWT_ACCESS_SECRET"],
        refresh_secret=config["JWT_REFRESH_SECRET"],
        access_ttl=timedelta(minutes=int(config["JWT_ACCESS_TTL_MINUTES"])),
        refresh_ttl=timedelta(days=int(config["JWT_REFRESH_TTL_DAYS"])),
        algorithm=config.get("JWT_ALGORITHM", "HS256"),
        issuer=config.get("JWT_ISSUER") or None,
    )


def build_session_store(config: Any, refresh_ttl: timedelta) -> SessionStore:
    backend = str(config.get("SESSION_BACKEND", "sql")).lower()
    if backend == "sql":
        return SQLSessionStore()
    if backend == "redis":
        return RedisSessionStore(r=get_redis(), ttl=refresh_ttl)
    if backend == "memory":
        return InMemorySessionStore()
    raise ValueError(f"Unknown SESSION_BACKEND {backend!r} (expected sql, redis or memory).")


def build_notifier(config: Any) -> ActivationNotifier:
    backend = str(config.get("MAIL_BACKEND", "log")).lower()
    if backend == "log":
        return LoggingNotifier()
    if backend == "smtp":
        return SMTPNotifier(
            host=config["MAIL_SERVER"],
            port=int(config["MAIL_PORT"]),
            sender=config["MAIL_DEFAULT_SENDER"],
            site=config.get("API_URL", "tokengate"),
            username=config.get("MAIL_USERNAME", ""),
            password=config.get("MAIL_PASSWORD", ""),
            use_tls=bool(config.get("MAIL_USE_TLS", False)),
            timeout=float(config.get("MAIL_TIMEOUT", 10)),
        )
    raise ValueError(f"Unknown MAIL_BACKEND {backend!r} (expected smtp or log).")


def activation_url_prefix(config: Any) -> str:
    """Return ``API_URL`` joined with ``ACTIVATION_PATH`` (single slash between)."""
    base = str(config.get("API_URL", "")).rstrip("/")
    path = "/" + str(config.get("ACTIVATION_PATH", "/")).lstrip("/")
    return f"{base}{path}"


def build_auth_service(config: Any) -> AuthService:
    codec_cfg = build_codec_config(config)
    hasher = WerkzeugCredentialHasher(method=config.get("PASSWORD_HASH_METHOD", "scrypt"))
    accounts = AccountService(
        hasher=hasher,
        require_activation=bool(config.get("REQUIRE_ACTIVATION", False)),
    )
    return AuthService(
        accounts=accounts,
        codec=JWTTokenCodec(codec_cfg),
        sessions=build_session_store(config, codec_cfg.refresh_ttl),
        notifier=build_notifier(config),
        activation_url_prefix=activation_url_prefix(config),
    )


def init_app(app: Flask) -> None:
    """Build the auth service for ``app``. Configuration faults abort startup."""
    service = build_auth_service(app.config)
    app.extensions[EXTENSION_KEY] = service
    log.info(
        "container.ready session_backend=%s mail_backend=%s",
        app.config.get("SESSION_BACKEND"),
        app.config.get("MAIL_BACKEND"),
    )


def get_auth_service() -> AuthService:
    """Return the auth service bound to the current application."""
    return cast(AuthService, current_app.extensions[EXTENSION_KEY])
