"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Service fixtures
wire the auth orchestrator to in-memory doubles unless a test asks for the
relational adapters explicitly.
"""

from __future__ import annotations

import os
from datetime import timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from tests.helpers import settings
from tokengate.core.config import TestingConfig
from tokengate.core.extensions import db as _db  # Flask-SQLAlchemy instance
from tokengate.factory import create_app  # application factory under test
from tokengate.infra.jwt import JWTTokenCodec
from tokengate.infra.security import WerkzeugCredentialHasher
from tokengate.services._shared.dto import TokenCodecConfig
from tokengate.services._shared.ports import InMemorySessionStore, RecordingNotifier
from tokengate.services.accounts import AccountService
from tokengate.services.auth import AuthService


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Uses the SQL session store and the logging notifier.
    - Pins token secrets so tests can decode what the app mints.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_ACCESS_SECRET = settings.ACCESS_SECRET
    JWT_REFRESH_SECRET = settings.REFRESH_SECRET
    JWT_SECRET_KEY = settings.ACCESS_SECRET
    JWT_ISSUER = None
    JWT_DECODE_ISSUER = None
    API_URL = settings.API_URL
    ACTIVATION_PATH = settings.ACTIVATION_PATH
    CLIENT_URL = ""
    REQUIRE_ACTIVATION = False
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = "*"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    Begins a top-level transaction, starts a SAVEPOINT per test, and
    reinstalls the SAVEPOINT whenever SQLAlchemy ends one. ``db.session`` is
    swapped for the scoped session so units of work use it too.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Service graph -------------------------------------------------------------
@pytest.fixture()
def hasher() -> WerkzeugCredentialHasher:
    return WerkzeugCredentialHasher(method=TestConfig.PASSWORD_HASH_METHOD)


@pytest.fixture()
def codec_cfg() -> TokenCodecConfig:
    return TokenCodecConfig(
        access_secret=settings.ACCESS_SECRET,
        refresh_secret=settings.REFRESH_SECRET,
        access_ttl=timedelta(minutes=30),
        refresh_ttl=timedelta(days=30),
    )


@pytest.fixture()
def codec(codec_cfg) -> JWTTokenCodec:
    return JWTTokenCodec(codec_cfg)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def account_service(hasher) -> AccountService:
    return AccountService(hasher=hasher)


@pytest.fixture()
def auth_service(account_service, codec, session_store, notifier) -> AuthService:
    """Auth orchestrator over the SQL account store and in-memory doubles."""
    return AuthService(
        accounts=account_service,
        codec=codec,
        sessions=session_store,
        notifier=notifier,
        activation_url_prefix=settings.ACTIVATION_PREFIX,
    )


@pytest.fixture()
def client(app):
    """Flask test client sharing the transactional session."""
    return app.test_client()
