"""Request-scoped accessors for the collaborators built by the app factory."""

from __future__ import annotations

from fastapi import Request

from prakriti.config import AppConfig
from prakriti.logic.question_bank import QuestionSource
from prakriti.logic.repository_responses import ResponseStore


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_question_source(request: Request) -> QuestionSource:
    return request.app.state.question_source


def get_response_store(request: Request) -> ResponseStore:
    return request.app.state.response_store


__all__ = ["get_config", "get_question_source", "get_response_store"]
