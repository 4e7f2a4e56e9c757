"""HTTP client for the survey API.

Wraps an `httpx.Client`; any httpx-compatible client works, including
FastAPI's TestClient for in-process use.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import httpx
from pydantic import ValidationError as PydanticValidationError

from prakriti.client.errors import (
    QuestionFetchError,
    SubmissionFailed,
    SubmissionRejected,
    SurveyClientError,
)
from prakriti.models.question import Question, QuestionsEnvelope
from prakriti.models.submission import SubmissionResult

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class SurveyApiClient:
    def __init__(self, http: httpx.Client, prefix: str = "/api") -> None:
        self.http = http
        self.prefix = prefix.rstrip("/")

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "SurveyApiClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self.http.close()

    def fetch_questions(self) -> List[Question]:
        try:
            resp = self.http.get(f"{self.prefix}/questions", headers={"Accept": "application/json"})
            resp.raise_for_status()
            return QuestionsEnvelope.model_validate(resp.json()).questions
        except (httpx.HTTPError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error("questions_fetch_failed error=%s", type(e).__name__)
            raise QuestionFetchError("Could not load the questions. Please refresh the page.") from e

    def submit(self, payload: Mapping[str, Any]) -> SubmissionResult:
        try:
            resp = self.http.post(f"{self.prefix}/submit", json=dict(payload))
        except httpx.TransportError as e:
            logger.error("submit_transport_failed error=%s", type(e).__name__)
            raise SubmissionFailed(GENERIC_FAILURE_MESSAGE) from e

        body = _json_or_empty(resp)
        if resp.status_code == 400:
            raise SubmissionRejected(str(body.get("error") or "Validation failed"), body.get("details") or [])
        if resp.status_code >= 500:
            raise SubmissionFailed(str(body.get("error") or GENERIC_FAILURE_MESSAGE))
        if resp.status_code != 200:
            raise SurveyClientError(f"unexpected status {resp.status_code} from submit")
        try:
            return SubmissionResult.model_validate(body)
        except PydanticValidationError as e:
            raise SurveyClientError("malformed submit response") from e


def _json_or_empty(resp: httpx.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


__all__ = ["SurveyApiClient", "GENERIC_FAILURE_MESSAGE"]
