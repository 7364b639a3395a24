# -*- coding: utf-8 -*-
"""Activity — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..days import normalize_day
from ..days import today as today_key
from ..errors import InvalidInput
from ..ledger import Ledger, get_ledger
from .models import (
    ActivityLogRequest,
    ActivityLogResponse,
    ActivityRecordsResponse,
    ActivityStats,
    CalendarResponse,
)

router = APIRouter(prefix="/api/activity", tags=["Activity"])


@router.get("/records", response_model=ActivityRecordsResponse, summary="All activity records")
def list_records(ledger: Ledger = Depends(get_ledger)):
    records = ledger.activity.records()
    return ActivityRecordsResponse(count=len(records), records=records)


@router.post("/log", response_model=ActivityLogResponse, summary="Log an action for a day")
def log_action(request: ActivityLogRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        day = request.day or today_key()
        changed = ledger.activity.log_action(day, request.kind)
        record = ledger.activity.record_for(day)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ActivityLogResponse(record=record, changed=changed)


@router.get("/stats", response_model=ActivityStats, summary="Streak, lifetime totals and badges")
def stats(
    today: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        return ledger.activity.stats(today or today_key())
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/calendar", response_model=CalendarResponse, summary="Monthly activity calendar")
def calendar(
    year: int | None = Query(default=None, ge=1, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
    today: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        current = normalize_day(today) if today else today_key()
        y = year or int(current[:4])
        m = month or int(current[5:7])
        days = ledger.activity.month_calendar(y, m, current)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CalendarResponse(year=y, month=m, days=days)
