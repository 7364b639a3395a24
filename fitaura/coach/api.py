# -*- coding: utf-8 -*-
"""Coach — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..activity.models import ActionKind
from ..days import today as today_key
from ..errors import CollaboratorError
from ..ledger import Ledger, get_ledger
from .client import generate_plan
from .models import PlanRequest, PlanResponse

router = APIRouter(prefix="/api/coach", tags=["Coach"])


@router.post("/plan", response_model=PlanResponse, summary="Generate a fitness plan")
def create_plan(request: PlanRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        plan = generate_plan(request.profile)
    except CollaboratorError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to generate plan: {exc}") from exc

    goals = ledger.nutrition.resync_goals_from(plan.nutrition) if request.sync_goals else None
    ledger.activity.log_action(today_key(), ActionKind.planner)
    return PlanResponse(plan=plan, goals=goals)
