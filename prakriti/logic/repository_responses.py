"""Survey response data access.

Encapsulates the SQL for the append-only `survey_responses` table so route
handlers and the submission service stay free of inline SQL. Database errors
are re-raised as ResponseStoreError.
"""

from __future__ import annotations

import logging
from typing import List, Protocol

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from prakriti.logic.errors import ResponseStoreError
from prakriti.models.submission import SurveyResponseRecord

logger = logging.getLogger(__name__)

COLUMNS = ("id", "timestamp", "name", "gender", "phone", "email", "city", "scores", "result", "description")


class ResponseStore(Protocol):
    def insert(self, record: SurveyResponseRecord) -> None: ...

    def list_all(self) -> List[SurveyResponseRecord]: ...


class SqlResponseStore:
    """ResponseStore backed by a SQLAlchemy Engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def insert(self, record: SurveyResponseRecord) -> None:
        columns = ", ".join(COLUMNS)
        params = ", ".join(f":{c}" for c in COLUMNS)
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    sql_text(f"INSERT INTO survey_responses ({columns}) VALUES ({params})"),
                    record.model_dump(),
                )
        except SQLAlchemyError as e:
            logger.error("response_insert_failed id=%s", record.id, exc_info=True)
            raise ResponseStoreError("failed to persist survey response") from e
        logger.info("response_inserted id=%s result=%s", record.id, record.result)

    def list_all(self) -> List[SurveyResponseRecord]:
        """Return every record, newest first."""
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    sql_text(
                        f"SELECT {', '.join(COLUMNS)} FROM survey_responses "
                        "ORDER BY timestamp DESC, id DESC"
                    )
                ).mappings().all()
        except SQLAlchemyError as e:
            logger.error("response_list_failed", exc_info=True)
            raise ResponseStoreError("failed to list survey responses") from e
        return [SurveyResponseRecord(**{c: str(r[c]) for c in COLUMNS}) for r in rows]


__all__ = ["ResponseStore", "SqlResponseStore", "COLUMNS"]
