from __future__ import annotations

"""Functional test bootstrap for the survey service.

Functional tests run against a file-backed SQLite database shared across the
session. Migrations are applied by the app factory on first creation; each
test starts from an empty `survey_responses` table.
"""

import pathlib
from typing import Dict, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import text as sql_text

from prakriti.config import AppConfig, DatabaseConfig
from prakriti.logic import events
from prakriti.main import create_app

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()


@pytest.fixture(autouse=True)
def clear_event_buffer() -> Iterator[None]:
    events.EVENT_BUFFER.clear()
    yield
    events.EVENT_BUFFER.clear()


@pytest.fixture(scope="session")
def app_config() -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(
            dsn=f"sqlite:///{_DB_FILE}",
            migrations_dir=str(_ROOT / "migrations"),
        )
    )


@pytest.fixture()
def app(app_config: AppConfig) -> FastAPI:
    application = create_app(app_config)
    with application.state.engine.begin() as conn:
        conn.execute(sql_text("DELETE FROM survey_responses"))
    return application


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def valid_info() -> Dict[str, str]:
    return {
        "name": "Asha Patel",
        "gender": "Female",
        "phone": "9876543210",
        "email": "asha@example.com",
        "city": "Gandhinagar",
    }

