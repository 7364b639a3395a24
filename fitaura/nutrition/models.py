# -*- coding: utf-8 -*-
"""Nutrition — Pydantic models."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Goals(BaseModel):
    calories: int = Field(2500, ge=0)
    protein: int = Field(150, ge=0)
    carbs: int = Field(300, ge=0)
    fiber: int = Field(30, ge=0)


class NutritionTotals(BaseModel):
    calories: int = Field(0, ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fiber: int = Field(0, ge=0)


class Meal(BaseModel):
    id: str
    name: str = Field(..., min_length=1)
    calories: int = Field(..., ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fats: int = Field(0, ge=0)
    fiber: int = Field(0, ge=0)
    timestamp: str = Field(..., description="ISO8601 timestamp")
    day: str = Field(..., description="YYYY-MM-DD, fixed when the meal is added")


class MealCreateRequest(BaseModel):
    name: str = Field(..., max_length=200)
    # Fractional values (e.g. from an estimate) are rounded when stored.
    calories: float
    protein: float = 0
    carbs: float = 0
    fats: float = 0
    fiber: float = 0
    timestamp: Optional[str] = Field(None, description="ISO8601 timestamp, defaults to now")


class MealCreateResponse(BaseModel):
    meal: Meal
    totals: NutritionTotals


class MealsResponse(BaseModel):
    day: Optional[str] = None
    count: int
    meals: List[Meal]


MacroValue = Union[int, float, str, None]


class NutritionPlan(BaseModel):
    """Nutrition section of a generated plan; macro values are often strings like "150g"."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    daily_calories: MacroValue = Field(None, alias="dailyCalories")
    protein: MacroValue = None
    carbs: MacroValue = None
    fats: MacroValue = None
    fiber: MacroValue = None
    key_foods: List[str] = Field(default_factory=list, alias="keyFoods")


class MacroProgress(BaseModel):
    calories: float = Field(0.0, ge=0, le=100)
    protein: float = Field(0.0, ge=0, le=100)
    carbs: float = Field(0.0, ge=0, le=100)
    fiber: float = Field(0.0, ge=0, le=100)


class DaySummary(BaseModel):
    day: str
    meal_count: int = Field(0, ge=0)
    totals: NutritionTotals
    goals: Goals
    progress: MacroProgress
    calories_remaining: int = Field(0, ge=0)
