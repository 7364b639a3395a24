# -*- coding: utf-8 -*-
"""Recovery — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..activity.models import ActionKind
from ..coach.client import analyze_recovery
from ..coach.models import RecoveryAnalyzeResponse
from ..days import normalize_day
from ..days import today as today_key
from ..errors import CollaboratorError, InvalidInput
from ..ledger import Ledger, get_ledger
from .models import AnalyzeRequest, RecordAnalysisRequest, SleepHistoryResponse, SleepLogResponse
from .storage import score_band

router = APIRouter(prefix="/api/recovery", tags=["Recovery"])


def _with_band(log) -> SleepLogResponse:
    band = score_band(log.readiness_score) if log.readiness_score is not None else None
    return SleepLogResponse(log=log, band=band)


@router.get("/logs", response_model=SleepHistoryResponse, summary="Sleep history (newest day first)")
def list_logs(
    limit: int | None = Query(default=None, ge=1, le=1000),
    ledger: Ledger = Depends(get_ledger),
):
    logs = ledger.recovery.history(limit)
    return SleepHistoryResponse(count=len(logs), logs=logs)


@router.get("/logs/{day}", response_model=SleepLogResponse, summary="Sleep log for a day")
def get_log(day: str, ledger: Ledger = Depends(get_ledger)):
    try:
        log = ledger.recovery.latest_for_day(day)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if log is None:
        raise HTTPException(status_code=404, detail="No sleep log for that day")
    return _with_band(log)


@router.post("/logs", response_model=SleepLogResponse, summary="Record an already computed analysis")
def record_log(request: RecordAnalysisRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        day = normalize_day(request.day) if request.day else today_key()
        log = ledger.recovery.record_analysis(
            day,
            request.hours,
            request.quality,
            request.soreness,
            readiness_score=request.readiness_score,
            feedback=request.feedback,
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    ledger.activity.log_action(log.day, ActionKind.sleep)
    return _with_band(log)


@router.post("/analyze", response_model=RecoveryAnalyzeResponse, summary="AI readiness analysis, then record it")
def analyze(request: AnalyzeRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        day = normalize_day(request.day) if request.day else today_key()
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        analysis = analyze_recovery(request.hours, request.quality, request.soreness)
    except CollaboratorError as exc:
        raise HTTPException(status_code=502, detail=f"Recovery analysis failed: {exc}") from exc

    log = ledger.recovery.record_analysis(
        day,
        request.hours,
        request.quality,
        request.soreness,
        readiness_score=analysis.readiness_score,
        feedback=analysis.workout_adjustment or analysis.summary or None,
    )
    ledger.activity.log_action(day, ActionKind.sleep)
    return RecoveryAnalyzeResponse(analysis=analysis, log=log)
