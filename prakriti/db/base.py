"""SQLAlchemy engine construction.

The service targets PostgreSQL in production but supports SQLite for local
development and CI. No declarative models are defined here; this module only
manages connection lifecycle. Repositories receive the Engine explicitly.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, text as sql_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


# Module-level cached Engine so the process shares one pool per URL
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def get_engine(url: str) -> Engine:
    """Return a singleton SQLAlchemy Engine for the given URL.

    For SQLite in-memory URLs, use a StaticPool to keep a single connection
    alive across sessions and threads during tests.
    """
    global _ENGINE, _ENGINE_URL

    if _ENGINE is None or _ENGINE_URL != url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            # Sync endpoints run in a threadpool
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url:
                kwargs["poolclass"] = StaticPool
        if _ENGINE is not None:
            # Release the previous pool before switching URLs
            _ENGINE.dispose()
            logger.info("db_engine_disposed dialect=%s", _ENGINE.dialect.name)
        _ENGINE = create_engine(url, **kwargs)
        _ENGINE_URL = url
        logger.info("db_engine_created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


def ping(engine: Engine) -> bool:
    """Return True when a trivial round-trip to the database succeeds."""
    try:
        with engine.connect() as conn:
            conn.execute(sql_text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.error("Health DB check failed", exc_info=True)
        return False
