# -*- coding: utf-8 -*-
"""Nutrition — API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..activity.models import ActionKind
from ..coach.client import analyze_food
from ..coach.models import FoodEstimateRequest, MealEstimate
from ..days import today as today_key
from ..errors import CollaboratorError, InvalidInput
from ..ledger import Ledger, get_ledger
from .models import (
    DaySummary,
    Goals,
    MealCreateRequest,
    MealCreateResponse,
    MealsResponse,
)

router = APIRouter(prefix="/api/nutrition", tags=["Nutrition"])


@router.get("/goals", response_model=Goals, summary="Current calorie/macro goals")
def get_goals(ledger: Ledger = Depends(get_ledger)):
    return ledger.nutrition.goals


@router.put("/goals", response_model=Goals, summary="Replace calorie/macro goals")
def put_goals(goals: Goals, ledger: Ledger = Depends(get_ledger)):
    return ledger.nutrition.set_goals(goals)


@router.post("/goals/resync", response_model=Goals, summary="Replace goals from a plan's nutrition section")
def resync_goals(plan: Dict[str, Any] = Body(...), ledger: Ledger = Depends(get_ledger)):
    return ledger.nutrition.resync_goals_from(plan)


@router.get("/meals", response_model=MealsResponse, summary="List meals (newest first)")
def list_meals(
    day: str | None = Query(default=None, description="YYYY-MM-DD"),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        meals = ledger.nutrition.meals_for_day(day) if day else ledger.nutrition.meals()
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return MealsResponse(day=day, count=len(meals), meals=meals)


@router.post("/meals", response_model=MealCreateResponse, summary="Add a meal")
def create_meal(request: MealCreateRequest, ledger: Ledger = Depends(get_ledger)):
    try:
        meal = ledger.nutrition.add_meal(
            request.name,
            request.calories,
            protein=request.protein,
            carbs=request.carbs,
            fats=request.fats,
            fiber=request.fiber,
            timestamp=request.timestamp,
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    ledger.activity.log_action(meal.day, ActionKind.meal)
    return MealCreateResponse(meal=meal, totals=ledger.nutrition.totals_for_day(meal.day))


@router.delete("/meals/{meal_id}", summary="Remove a meal")
def delete_meal(meal_id: str, ledger: Ledger = Depends(get_ledger)):
    removed = ledger.nutrition.remove_meal(meal_id)
    return {"meal_id": meal_id, "removed": removed}


@router.get("/summary", response_model=DaySummary, summary="Day totals against goals")
def summary(
    day: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        return ledger.nutrition.day_summary(day or today_key())
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/estimate", response_model=MealEstimate, summary="AI macro estimate (no storage)")
def estimate(request: FoodEstimateRequest):
    try:
        return analyze_food(request.description)
    except CollaboratorError as exc:
        raise HTTPException(status_code=502, detail=f"Food analysis failed: {exc}") from exc
