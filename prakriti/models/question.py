"""Pydantic models for the question bank."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

OPTIONS_PER_QUESTION = 3


class Question(BaseModel):
    """One multiple-choice question; option position maps to bucket a/b/c."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="question", min_length=1)
    options: List[str]

    @field_validator("options")
    @classmethod
    def exactly_three_options(cls, v: List[str]) -> List[str]:
        if len(v) != OPTIONS_PER_QUESTION:
            raise ValueError(f"a question must have exactly {OPTIONS_PER_QUESTION} options")
        if any(not isinstance(o, str) or not o.strip() for o in v):
            raise ValueError("options must be non-empty strings")
        return v


class QuestionsEnvelope(BaseModel):
    questions: List[Question]


__all__ = ["Question", "QuestionsEnvelope", "OPTIONS_PER_QUESTION"]
