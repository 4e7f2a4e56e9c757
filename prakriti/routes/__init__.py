"""APIRouter registration for the survey service."""

from __future__ import annotations

from fastapi import APIRouter

from prakriti.routes.export import router as export_router
from prakriti.routes.questions import router as questions_router
from prakriti.routes.submit import router as submit_router

api_router = APIRouter()
api_router.include_router(questions_router, tags=["Questions"])
api_router.include_router(submit_router, tags=["Submission"])
api_router.include_router(export_router, tags=["Export"])

__all__ = ["api_router"]
