"""Functional tests for configuration, migrations and the question bank."""

from __future__ import annotations

import json
import pathlib

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import create_engine, text as sql_text

from prakriti.config import DEFAULT_DSN, AppConfig, DatabaseConfig, load_config
from prakriti.db.base import get_engine
from prakriti.db.migrations_runner import applied_migrations, apply_migrations
from prakriti.logic.errors import QuestionBankError, ResponseStoreError
from prakriti.logic.question_bank import StaticQuestionSource, load_question_bank
from prakriti.logic.repository_responses import SqlResponseStore

_MIGRATIONS = pathlib.Path(__file__).resolve().parents[2] / "migrations"

_ENV_KEYS = (
    "DATABASE_URL",
    "AUTO_APPLY_MIGRATIONS",
    "MIGRATIONS_DIR",
    "QUESTION_BANK_PATH",
    "CSV_EXPORT_INCLUDE_HEADER",
    "CORS_ALLOW_ORIGINS",
    "LOG_LEVEL",
)


@pytest.fixture()
def isolated_env(tmp_path, monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# -- configuration --

def test_defaults_without_any_source(isolated_env):
    cfg = load_config()
    assert cfg.database.dsn == DEFAULT_DSN
    assert cfg.database.auto_apply_migrations is True
    assert cfg.questions.path is None
    assert cfg.csv.export_include_header is True
    assert cfg.cors.allow_origins == ["*"]
    assert cfg.log_level == "INFO"


def test_env_overrides_files_and_json(isolated_env, monkeypatch):
    (isolated_env / "prakriti_config.json").write_text(
        json.dumps({"database": {"dsn": "sqlite:///json.db"}, "log_level": "debug"}), encoding="utf-8"
    )
    (isolated_env / "config").mkdir()
    (isolated_env / "config" / "database.url").write_text("sqlite:///file.db\n", encoding="utf-8")
    assert load_config().database.dsn == "sqlite:///file.db"
    assert load_config().log_level == "DEBUG"

    monkeypatch.setenv("DATABASE_URL", "sqlite:///env.db")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("CSV_EXPORT_INCLUDE_HEADER", "false")
    cfg = load_config()
    assert cfg.database.dsn == "sqlite:///env.db"
    assert cfg.cors.allow_origins == ["https://a.example", "https://b.example"]
    assert cfg.csv.export_include_header is False


def test_empty_database_url_falls_back(isolated_env, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "")
    assert load_config().database.dsn == DEFAULT_DSN


def test_invalid_log_level_rejected(isolated_env, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(PydanticValidationError):
        load_config()


def test_blank_dsn_rejected():
    with pytest.raises(PydanticValidationError):
        AppConfig(database=DatabaseConfig(dsn="   "))


# -- migrations --

def test_migrations_apply_once(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'm.db'}")
    first = apply_migrations(engine, _MIGRATIONS)
    assert first == ["001_survey_responses.sql"]
    assert apply_migrations(engine, _MIGRATIONS) == []
    assert applied_migrations(engine) == {"001_survey_responses.sql"}
    with engine.connect() as conn:
        assert conn.execute(sql_text("SELECT COUNT(*) FROM survey_responses")).scalar_one() == 0


def test_missing_migrations_dir_is_noop(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'm.db'}")
    assert apply_migrations(engine, tmp_path / "absent") == []


def test_store_without_schema_raises_store_error(tmp_path):
    store = SqlResponseStore(create_engine(f"sqlite:///{tmp_path / 'bare.db'}"))
    with pytest.raises(ResponseStoreError):
        store.list_all()


# -- question bank --

def test_packaged_bank_loads():
    source = load_question_bank()
    assert len(source) == 20
    assert all(len(q.options) == 3 for q in source.list_questions())


def test_bank_from_custom_path(tmp_path):
    path = tmp_path / "bank.json"
    path.write_text(json.dumps({"questions": [{"question": "Q?", "options": ["x", "y", "z"]}]}), encoding="utf-8")
    assert [q.text for q in load_question_bank(path).list_questions()] == ["Q?"]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"questions": [{"question": "Q?", "options": ["x", "y"]}]}),
        json.dumps({"questions": [{"question": "", "options": ["x", "y", "z"]}]}),
        json.dumps({"questions": []}),
    ],
)
def test_bad_bank_rejected(tmp_path, content):
    path = tmp_path / "bank.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(QuestionBankError):
        load_question_bank(path)


def test_missing_bank_rejected(tmp_path):
    with pytest.raises(QuestionBankError):
        load_question_bank(tmp_path / "absent.json")


def test_static_source_returns_copies():
    source = load_question_bank()
    listed = source.list_questions()
    listed.clear()
    assert len(source.list_questions()) == 20
    assert isinstance(source, StaticQuestionSource)


def test_switching_engine_url_disposes_previous_pool(tmp_path):
    first = get_engine(f"sqlite:///{tmp_path / 'first.db'}")
    with first.connect() as conn:
        conn.execute(sql_text("SELECT 1"))
    old_pool = first.pool
    assert old_pool.checkedin() == 1

    second = get_engine(f"sqlite:///{tmp_path / 'second.db'}")
    assert second is not first
    assert old_pool.checkedin() == 0
    assert get_engine(f"sqlite:///{tmp_path / 'second.db'}") is second
