"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Loads .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_ACCESS_SECRET: str
        HMAC key of the access-token signing domain.
    JWT_REFRESH_SECRET: str
        HMAC key of the refresh-token signing domain. Must differ from
        ``JWT_ACCESS_SECRET``.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` to verify bearer tokens on protected
        routes. Mirrors ``JWT_ACCESS_SECRET``.
    JWT_ACCESS_TTL_MINUTES: int
        Access-token lifetime.
    JWT_REFRESH_TTL_DAYS: int
        Refresh-token lifetime (also the refresh cookie ``max_age``).
    API_URL: str
        Public base URL of this service, used to build activation links.
    ACTIVATION_PATH: str
        Path appended to ``API_URL`` before the activation link token.
    CLIENT_URL: str
        Front-end URL the activation endpoint redirects to. Empty disables the
        redirect.
    REQUIRE_ACTIVATION: bool
        When ``True`` login is refused for accounts that are not activated.
    PASSWORD_HASH_METHOD: str
        Werkzeug hashing method (``scrypt`` or ``pbkdf2:sha256[:iterations]``).
    SESSION_BACKEND: str
        Refresh session store: ``sql``, ``redis`` or ``memory``.
    MAIL_BACKEND: str
        Activation mail delivery: ``smtp`` or ``log``.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", "CHANGE_ME_ACCESS")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "CHANGE_ME_REFRESH")
    JWT_SECRET_KEY = JWT_ACCESS_SECRET
    JWT_ALGORITHM = "HS256"
    JWT_ISSUER = os.getenv("JWT_ISSUER") or None
    JWT_DECODE_ISSUER = JWT_ISSUER
    JWT_ACCESS_TTL_MINUTES = env_int("JWT_ACCESS_TTL_MINUTES", 30)
    JWT_REFRESH_TTL_DAYS = env_int("JWT_REFRESH_TTL_DAYS", 30)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Activation flow
    API_URL = os.getenv("API_URL", "http://localhost:8000")
    ACTIVATION_PATH = os.getenv("ACTIVATION_PATH", "/api/v1/auth/activate/")
    CLIENT_URL = os.getenv("CLIENT_URL", "")
    REQUIRE_ACTIVATION = env_bool("REQUIRE_ACTIVATION", False)

    # Refresh cookie
    REFRESH_COOKIE_NAME = os.getenv("REFRESH_COOKIE_NAME", "refresh_token")
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", False)

    # Session persistence
    SESSION_BACKEND = os.getenv("SESSION_BACKEND", "sql").strip().lower()
    REDIS_URL = os.getenv("REDIS_URL", "")

    # Mail
    MAIL_BACKEND = os.getenv("MAIL_BACKEND", "log").strip().lower()
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = env_int("MAIL_PORT", 25)
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_USE_TLS = env_bool("MAIL_USE_TLS", False)
    MAIL_TIMEOUT = env_int("MAIL_TIMEOUT", 10)
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "no-reply@localhost")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and logs activation mails instead of
    sending them.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses a cheap PBKDF2 round count so hashing does not dominate test time.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PROPAGATE_EXCEPTIONS = True
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    SESSION_BACKEND = "sql"
    MAIL_BACKEND = "log"
    REDIS_URL = ""


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    MAIL_BACKEND = os.getenv("MAIL_BACKEND", "smtp").strip().lower()
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", True)


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
