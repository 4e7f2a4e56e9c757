"""Configuration utilities for the Prakriti survey service.

This module loads application configuration with the following rules:
- Primary source: `prakriti_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.

Configuration is resolved once by the application factory and injected into
the response store and question source; modules do not read the environment
on their own.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("prakriti_config.json")
DEFAULT_DSN = "sqlite:///./prakriti_survey.db"
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def _as_bool(text: object) -> bool:
    return str(text).strip().lower() in {"true", "1", "yes"}


class DatabaseConfig(BaseModel):
    dsn: str
    auto_apply_migrations: bool = Field(default=True)
    migrations_dir: str = Field(default="migrations")

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v.strip()


class QuestionsConfig(BaseModel):
    # None selects the bank packaged with the service
    path: Optional[str] = None


class CsvConfig(BaseModel):
    export_include_header: bool = Field(default=True)
    export_filename: str = Field(default="survey_responses.csv")


class CorsConfig(BaseModel):
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    database: DatabaseConfig
    questions: QuestionsConfig = Field(default_factory=QuestionsConfig)
    csv: CsvConfig = Field(default_factory=CsvConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = str(v).strip().upper()
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return level


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover - defensive
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) prakriti_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(item) for item in cur)
        return str(cur) if cur is not None else default

    # Database
    dsn = _env("DATABASE_URL") or _read_config_file("database.url") or _base("database.dsn") or DEFAULT_DSN
    auto_migrate_text = (
        _env("AUTO_APPLY_MIGRATIONS")
        or _read_config_file("database.auto_apply_migrations")
        or _base("database.auto_apply_migrations", "true")
    )
    migrations_dir = _env("MIGRATIONS_DIR") or _base("database.migrations_dir", "migrations")

    # Question bank
    questions_path = _env("QUESTION_BANK_PATH") or _read_config_file("questions.path") or _base("questions.path")

    # CSV export
    include_header_text = (
        _env("CSV_EXPORT_INCLUDE_HEADER")
        or _read_config_file("csv.export.include_header")
        or _base("csv.export_include_header", "true")
    )

    # CORS and logging
    origins_text = _env("CORS_ALLOW_ORIGINS") or _read_config_file("cors.allow_origins") or _base("cors.allow_origins", "*")
    log_level = _env("LOG_LEVEL") or _base("log_level", "INFO")

    try:
        cfg = AppConfig(
            database=DatabaseConfig(
                dsn=dsn,
                auto_apply_migrations=_as_bool(auto_migrate_text),
                migrations_dir=str(migrations_dir),
            ),
            questions=QuestionsConfig(path=questions_path or None),
            csv=CsvConfig(export_include_header=_as_bool(include_header_text)),
            cors=CorsConfig(allow_origins=[o.strip() for o in str(origins_text).split(",") if o.strip()]),
            log_level=str(log_level),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "QuestionsConfig",
    "CsvConfig",
    "CorsConfig",
    "load_config",
]
