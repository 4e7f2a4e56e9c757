"""Pydantic models for submission and record bodies."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Counts(BaseModel):
    vata: int
    pitta: int
    kapha: int


class SubmissionResult(BaseModel):
    result: str
    description: str
    counts: Counts


class SurveyResponseRecord(BaseModel):
    """The unit of persistence; never mutated once built."""

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: str
    name: str
    gender: str
    phone: str
    email: str
    city: str
    scores: str
    result: str
    description: str


__all__ = ["Counts", "SubmissionResult", "SurveyResponseRecord"]
