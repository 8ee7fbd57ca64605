"""
Imports Router
API endpoints for uploading Strong CSV exports and managing the workout collection
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from typing import Optional

import config
from analytics import (
    OneRepMaxFormula,
    WorkoutImportError,
    compute_all_prs,
    ingest_with_report,
    records_set_in_workout,
)
from store import WorkoutStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Workouts"])


@router.post("/imports/csv")
async def import_strong_csv(
    request: Request,
    file_label: str = Query(default="upload.csv", description="Name recorded on imported workouts"),
    formula: Optional[str] = Query(default=None, description="1RM formula, defaults to the configured one"),
    store: WorkoutStore = Depends(get_store)
):
    """
    Import a Strong app CSV export.

    Send the file contents as the request body. Workouts whose date
    already exists in the collection are skipped.

    - **file_label**: File name to record on each workout
    - **formula**: 1RM formula (EPLEY, BRZYCKI, LOMBARDI, MAYHEW, OCONNER, WATHAN)
    """
    body = await request.body()
    try:
        csv_text = body.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV must be UTF-8 encoded text")

    one_rep_max_formula = OneRepMaxFormula.resolve(formula) if formula else config.ONE_REP_MAX_FORMULA

    try:
        workouts, report = ingest_with_report(csv_text, file_label, one_rep_max_formula)
    except WorkoutImportError as e:
        logger.warning("Rejected upload %r: %s", file_label, e)
        raise HTTPException(status_code=400, detail=str(e))

    result = store.merge(workouts)

    return {
        "file_label": file_label,
        "formula": one_rep_max_formula.value,
        "new_workouts": result.new_count,
        "skipped_duplicates": result.skipped_count,
        "total_workouts": len(result.workouts),
        "report": report.to_dict()
    }


@router.get("/workouts")
async def list_workouts(
    limit: Optional[int] = Query(default=None, ge=1, description="Only return the newest N workouts"),
    store: WorkoutStore = Depends(get_store)
):
    """
    List imported workouts, newest first.

    Each workout carries the personal records it still holds.
    """
    workouts = store.workouts
    prs = compute_all_prs(workouts)
    if limit is not None:
        workouts = workouts[:limit]

    return {
        "count": len(workouts),
        "workouts": [
            {**w.to_dict(), "records": records_set_in_workout(w, prs)}
            for w in workouts
        ]
    }


@router.delete("/workouts")
async def clear_workouts(store: WorkoutStore = Depends(get_store)):
    """Remove every imported workout"""
    return {"removed": store.clear()}
