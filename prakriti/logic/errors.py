"""Domain exceptions raised by the survey core and its collaborators."""

from __future__ import annotations

from typing import Iterable, List


class SurveyError(Exception):
    pass


class MalformedSubmissionError(SurveyError, ValueError):
    """Payload could not be interpreted at all; raised before validation."""


class SubmissionValidationError(SurveyError, ValueError):
    """One or more fields or answers failed validation.

    Carries every failure message, not just the first.
    """

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages) or "validation failed")


class ResponseStoreError(SurveyError):
    """The response store could not persist or list records."""


class QuestionBankError(SurveyError):
    """The question bank is missing or malformed."""


__all__ = [
    "SurveyError",
    "MalformedSubmissionError",
    "SubmissionValidationError",
    "ResponseStoreError",
    "QuestionBankError",
]
