from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from prakriti.config import AppConfig, load_config
from prakriti.db.base import get_engine, ping
from prakriti.db.migrations_runner import apply_migrations
from prakriti.http.problem import (
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from prakriti.http.request_id import RequestIdMiddleware
from prakriti.logging_setup import configure_logging
from prakriti.logic.question_bank import load_question_bank
from prakriti.logic.repository_responses import SqlResponseStore
from prakriti.middleware.cors import apply_cors
from prakriti.routes import api_router

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the API with its collaborators resolved once from configuration.

    The engine, response store and question bank are created here and
    exposed on `app.state` for the route dependencies.
    """
    config = config or load_config()
    configure_logging(config.log_level)

    engine = get_engine(config.database.dsn)
    if config.database.auto_apply_migrations:
        try:
            apply_migrations(engine, config.database.migrations_dir)
        except Exception:
            logger.error("Failed to apply migrations at startup", exc_info=True)
            raise
    else:
        logger.info("AUTO_APPLY_MIGRATIONS disabled; skipping migrations at startup")

    app = FastAPI(title="Prakriti Survey API", version="0.1.0")
    app.state.config = config
    app.state.engine = engine
    app.state.response_store = SqlResponseStore(engine)
    app.state.question_source = load_question_bank(config.questions.path)

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    apply_cors(app, origins=config.cors.allow_origins)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health():
        db_ok = ping(engine)
        return {"status": "ok" if db_ok else "degraded", "db": db_ok}

    return app

