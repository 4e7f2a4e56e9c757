"""Question bank endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prakriti.logic.question_bank import QuestionSource
from prakriti.models.question import QuestionsEnvelope
from prakriti.routes.dependencies import get_question_source

router = APIRouter()


@router.get(
    "/questions",
    summary="List the survey questions in presentation order",
    operation_id="listQuestions",
    response_model=QuestionsEnvelope,
    response_model_by_alias=True,
)
def list_questions(source: QuestionSource = Depends(get_question_source)):
    return QuestionsEnvelope(questions=source.list_questions())


__all__ = ["router", "list_questions"]
