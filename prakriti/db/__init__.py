"""Database bootstrap utilities for the survey service.

Exposes engine construction and the migrations runner that applies SQL files
from the local migrations/ directory. The DB layer does not leak ORM models
into route handlers.
"""

from prakriti.db.base import get_engine, ping
from prakriti.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "ping",
    "apply_migrations",
]
