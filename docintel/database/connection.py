from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from docintel.config.settings import Settings
from docintel.logging.logger import Log

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    """libpq connection string for the configured database, with values quoted."""
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        application_name="docintel",
    )


def init_pool(settings: Settings, max_size: int | None = None) -> None:
    """Open the global connection pool.

    The default size gives every worker thread its own connection, plus the
    poll loop and one synchronous caller.
    """
    global _pool  # noqa: PLW0603
    size = max_size if max_size is not None else settings.worker_pool_size + 2
    _pool = ConnectionPool(
        build_conninfo(settings),
        min_size=1,
        max_size=size,
        check=ConnectionPool.check_connection,
        name="docintel",
    )
    Log.info("Database pool opened", host=settings.db_host, max_size=size)


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
