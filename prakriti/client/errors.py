"""Exceptions raised on the respondent side of the survey."""

from __future__ import annotations

from typing import Iterable, List


class SurveyClientError(Exception):
    pass


class QuestionFetchError(SurveyClientError):
    """Questions could not be loaded; the flow cannot start."""


class SubmissionRejected(SurveyClientError):
    """The server refused the submission (HTTP 400)."""

    def __init__(self, message: str, details: Iterable[str] = ()):
        self.details: List[str] = list(details)
        super().__init__(message)


class SubmissionFailed(SurveyClientError):
    """The submission passed validation but could not be stored (HTTP 5xx)."""


class FlowError(Exception):
    pass


class InvalidTransition(FlowError):
    def __init__(self, action: str, state: object):
        self.action = action
        self.state = state
        super().__init__(f"cannot {action} while {state}")


__all__ = [
    "SurveyClientError",
    "QuestionFetchError",
    "SubmissionRejected",
    "SubmissionFailed",
    "FlowError",
    "InvalidTransition",
]
