"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction on a single in-memory SQLite
connection. The session joins it through SAVEPOINTs, so ``commit()`` calls
made by Units of Work only release a savepoint and everything is rolled back
when the test ends.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from tests.helpers.media import FakeMediaRelay
from vidshare.core.config import TestingConfig
from vidshare.core.extensions import MEDIA_RELAY_KEY
from vidshare.core.extensions import db as _db  # Flask-SQLAlchemy instance
from vidshare.factory import create_app  # application factory under test


@pytest.fixture(scope="session")
def upload_dir(tmp_path_factory):
    """Directory used as ``UPLOAD_TEMP_DIR`` for the whole run."""
    return tmp_path_factory.mktemp("uploads")


@pytest.fixture(scope="session")
def app(upload_dir):
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied, uploads
        staged under a temporary directory and no proxy middleware.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)

    class TestConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        UPLOAD_TEMP_DIR = str(upload_dir)
        USE_PROXYFIX = False

    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session.

    pysqlite is switched to driver-level autocommit and ``BEGIN`` is emitted
    explicitly, otherwise SAVEPOINT release would commit for real.
    """
    engine = db.engine

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    conn = engine.connect()
    conn.connection.driver_connection.isolation_level = None
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a scoped session bound to a per-test outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Installed as ``db.session`` so application code (Units of Work, the
        auth middleware, request handlers) shares it.

    Notes
    -----
    ``join_transaction_mode="create_savepoint"`` makes every session-level
    commit or rollback act on a SAVEPOINT. ``expire_on_commit=False`` keeps
    factory objects readable after a request tears the session down.
    """
    outer = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
        autoflush=False,
    )
    scoped = scoped_session(SessionFactory)

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture(autouse=True)
def media_relay(app):
    """Replace the Cloudinary relay with an in-process fake for every test."""
    original = app.extensions[MEDIA_RELAY_KEY]
    fake = FakeMediaRelay()
    app.extensions[MEDIA_RELAY_KEY] = fake
    try:
        yield fake
    finally:
        app.extensions[MEDIA_RELAY_KEY] = original


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def bare_client(app, session):
    """Test client without a cookie jar; tokens travel only where a test puts them."""
    return app.test_client(use_cookies=False)


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


@pytest.fixture()
def freeze_time():
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None):
        return _freeze_time(target or "2024-01-01")

    return _factory
