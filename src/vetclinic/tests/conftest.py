"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and app/client wiring that are
needed across ALL kinds of tests (repositories, dispatcher, API, auth, ...).

Domain-specific fixtures live in:
- tests/test_fixtures/crud_fixtures.py

Every test gets its own throwaway database (a SQLite file under tmp_path)
unless TEST_DATABASE_URL points somewhere else, so tests that commit never
leak rows into each other.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from typing import AsyncGenerator
from urllib.parse import urlparse

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Silence noisy third-party loggers at import time, before importing modules
# that might initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import httpx
import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from vetclinic.config.settings import Settings
from vetclinic.core.logging.builder import setup_logging
from vetclinic.database.base import Base
from vetclinic.database.bootstrap import create_tables
from vetclinic.database.session import make_engine, make_session_maker
from vetclinic.main import create_app

logger = logging.getLogger(__name__)

# Long enough for HS256 without key-length warnings
TEST_JWT_SECRET = "test-secret-with-enough-bytes-for-hs256-signing"


def safe_log_db_url(db_url: str) -> str:
    """Drop credentials from a database URL before logging it."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def make_test_settings(database_url: str, **overrides) -> Settings:
    values = {
        "ENV": "testing",
        "DATABASE_URL": database_url,
        "DB_BOOTSTRAP": False,
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": 4,  # bcrypt minimum, keeps the suite fast
        "LOG_TO_STDOUT": True,
        "LOG_FORMAT": "json",
    }
    values.update(overrides)
    return Settings(**values)


# The `autouse=True` part means pytest uses this fixture without it being requested.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install application logging for the whole test session, then re-attach
    pytest's capture handler (dictConfig may have removed it) so `caplog`
    keeps working.
    """
    setup_logging(make_test_settings("sqlite+aiosqlite://"))

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
def test_database_url(tmp_path) -> str:
    """
    1. TEST_DATABASE_URL (CI, e.g. a disposable Postgres database)
    2. a fresh SQLite file for this test
    """
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    logger.debug("Using test DB: %s", safe_log_db_url(url))
    return url


@pytest.fixture()
async def async_engine(test_database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    engine = make_engine(test_database_url)
    await create_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    maker = make_session_maker(async_engine)
    async with maker() as session:
        yield session
        await session.rollback()


# ------------------------------------------------------------------------------------------------
# APP / CLIENT FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
def test_settings(test_database_url: str) -> Settings:
    return make_test_settings(test_database_url)


@pytest.fixture()
async def app(test_settings: Settings):
    application = create_app(test_settings)
    # ASGITransport does not run the lifespan, so bootstrap the schema here.
    await create_tables(application.state.engine)

    yield application

    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await application.state.engine.dispose()


@pytest.fixture()
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# Shared domain fixtures
from .test_fixtures.crud_fixtures import (  # noqa: E402,F401
    table_repo,
    real_dispatcher,
    stub_repository,
    stub_dispatcher,
    api_prefix,
    create_record,
    tutor,
    pet,
    service,
)
