from __future__ import annotations

from datetime import timedelta

import pytest

from tokengate.container import (
    activation_url_prefix,
    build_auth_service,
    build_notifier,
    build_session_store,
    get_auth_service,
)
from tokengate.infra.mail import LoggingNotifier, SMTPNotifier
from tokengate.infra.sql import SQLSessionStore
from tokengate.services._shared.ports import InMemorySessionStore
from tokengate.services.auth import AuthService

BASE = {
    "JWT_ACCESS_SECRET": "a" * 32,
    "JWT_REFRESH_SECRET": "r" * 32,
    "JWT_ACCESS_TTL_MINUTES": 30,
    "JWT_REFRESH_TTL_DAYS": 30,
    "SESSION_BACKEND": "memory",
    "MAIL_BACKEND": "log",
    "API_URL": "https://auth.example.com/",
    "ACTIVATION_PATH": "api/v1/auth/activate/",
    "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
}


def test_app_exposes_auth_service(app):
    with app.app_context():
        assert isinstance(get_auth_service(), AuthService)
        assert isinstance(get_auth_service().sessions, SQLSessionStore)


def test_activation_prefix_joins_with_single_slash():
    assert activation_url_prefix(BASE) == "https://auth.example.com/api/v1/auth/activate/"


@pytest.mark.parametrize(
    ("backend", "cls"),
    [("memory", InMemorySessionStore), ("sql", SQLSessionStore)],
)
def test_session_backend_selection(backend, cls):
    store = build_session_store({**BASE, "SESSION_BACKEND": backend}, timedelta(days=1))
    assert isinstance(store, cls)


def test_unknown_session_backend_is_rejected():
    with pytest.raises(ValueError):
        build_session_store({**BASE, "SESSION_BACKEND": "cassandra"}, timedelta(days=1))


def test_notifier_selection():
    assert isinstance(build_notifier(BASE), LoggingNotifier)
    smtp = build_notifier(
        {
            **BASE,
            "MAIL_BACKEND": "smtp",
            "MAIL_SERVER": "mail.example.com",
            "MAIL_PORT": 587,
            "MAIL_DEFAULT_SENDER": "no-reply@example.com",
            "MAIL_USE_TLS": True,
        }
    )
    assert isinstance(smtp, SMTPNotifier)
    assert (smtp.host, smtp.port, smtp.use_tls) == ("mail.example.com", 587, True)


def test_identical_secrets_abort_wiring():
    with pytest.raises(ValueError):
        build_auth_service({**BASE, "JWT_REFRESH_SECRET": BASE["JWT_ACCESS_SECRET"]})
