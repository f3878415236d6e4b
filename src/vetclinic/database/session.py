"""
Engine and session factory construction.

Nothing here runs at import time: the application factory builds one engine
(the process-wide connection pool) and passes it around explicitly, so tests
can point the whole app at a throwaway database.
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from vetclinic.config.settings import Settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with FK enforcement off; turn it on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(target: Settings | str, *, echo: bool = False) -> AsyncEngine:
    """
    Create the AsyncEngine for a Settings object or a raw URL.

    - Settings: uses SQLALCHEMY_DATABASE_URL, SQLALCHEMY_ECHO, DATABASE_SSL_REQUIRE
      and ENABLE_SQL_LOGGING.
    - str: used as-is (tests, scripts).

    Bound parameters are left out of statement errors unless ENABLE_SQL_LOGGING
    is on, so client values never reach logged tracebacks.
    """
    connect_args: dict[str, Any] = {}
    hide_parameters = True
    if isinstance(target, Settings):
        url = target.SQLALCHEMY_DATABASE_URL
        echo = target.SQLALCHEMY_ECHO
        hide_parameters = not target.ENABLE_SQL_LOGGING
        if target.DATABASE_SSL_REQUIRE:
            connect_args["sslmode"] = "require"
    else:
        url = target

    engine = create_async_engine(
        url,
        echo=echo,
        hide_parameters=hide_parameters,
        pool_pre_ping=True,   # Enables connection health checks
        connect_args=connect_args,
    )

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def make_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # `async_sessionmaker` returns an async session factory.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
