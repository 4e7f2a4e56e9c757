"""Shared payload builders for functional tests."""

from __future__ import annotations

from typing import Dict, List

from fastapi import FastAPI
from sqlalchemy import text as sql_text

QUESTION_COUNT = 20


def answers_from(letters: List[str]) -> Dict[str, str]:
    return {f"q{i}": letter for i, letter in enumerate(letters)}


def vata_letters() -> List[str]:
    # 15 "a" answers and 5 mixed
    return ["a"] * 15 + ["b", "c", "b", "c", "b"]


def count_rows(app: FastAPI) -> int:
    with app.state.engine.connect() as conn:
        return int(conn.execute(sql_text("SELECT COUNT(*) FROM survey_responses")).scalar_one())
