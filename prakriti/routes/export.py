"""CSV export of all stored survey responses."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
import logging

from prakriti.config import AppConfig
from prakriti.http.problem import problem_response
from prakriti.logic.csv_export import build_export_csv
from prakriti.logic.errors import ResponseStoreError
from prakriti.logic.repository_responses import ResponseStore
from prakriti.routes.dependencies import get_config, get_response_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/export-csv",
    summary="Download every survey response as CSV, newest first",
    operation_id="exportResponsesCsv",
)
def export_csv(
    store: ResponseStore = Depends(get_response_store),
    config: AppConfig = Depends(get_config),
):
    try:
        records = store.list_all()
    except ResponseStoreError:
        return problem_response(500, "Internal Server Error", error="Failed to fetch survey responses.")
    if not records:
        return problem_response(404, "Not Found", message="No survey responses found.")

    body = build_export_csv(records, include_header=config.csv.export_include_header)
    logger.info("export_csv rows=%d", len(records))
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{config.csv.export_filename}"'},
    )


__all__ = ["router", "export_csv"]
