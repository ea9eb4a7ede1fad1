from __future__ import annotations

import pytest

from tokengate.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), ("yes", True), ("on", True), ("0", False), ("off", False), ("", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("TG_FLAG", raw)
    assert env_bool("TG_FLAG") is expected


def test_env_bool_default_when_unset(monkeypatch):
    monkeypatch.delenv("TG_FLAG", raising=False)
    assert env_bool("TG_FLAG", default=True) is True


def test_env_int(monkeypatch):
    monkeypatch.setenv("TG_NUMBER", " 42 ")
    assert env_int("TG_NUMBER", 1) == 42
    monkeypatch.setenv("TG_NUMBER", "")
    assert env_int("TG_NUMBER", 7) == 7


@pytest.mark.parametrize(
    ("name", "cls"),
    [
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        ("production", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_by_app_env(monkeypatch, name, cls):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is cls


def test_access_secret_feeds_flask_jwt_extended():
    assert TestingConfig.JWT_SECRET_KEY == TestingConfig.JWT_ACCESS_SECRET
    assert TestingConfig.JWT_ACCESS_SECRET != TestingConfig.JWT_REFRESH_SECRET
