# -*- coding: utf-8 -*-
"""Coach — request/response models for the AI collaborator.

Model output arrives in camelCase (``dailyCalories``, ``readinessScore``);
every model accepts both that and the snake_case field names.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..nutrition.models import Goals, NutritionPlan
from ..recovery.models import SleepLog


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class StressLevel(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class UserProfile(_CamelModel):
    goal: str = Field("Lean Bulking", max_length=120)
    timeline: str = Field("12 weeks", max_length=120)
    quantifiable_target: str = Field("", max_length=200)
    age: int = Field(25, ge=10, le=120)
    gender: str = Field("Other", max_length=40)
    height: float = Field(175.0, gt=0, description="cm")
    weight: float = Field(70.0, gt=0, description="kg")
    body_fat: str = Field("N/A", max_length=40)
    dietary_restrictions: str = Field("", max_length=500)
    medical_conditions: str = Field("", max_length=500)
    experience: str = Field("Beginner", max_length=40)
    frequency: int = Field(3, ge=1, le=7, description="days per week")
    equipment: str = Field("", max_length=200)
    workout_split: str = Field("", max_length=200)
    cardio_preference: str = Field("", max_length=200)
    activity_level: str = Field("Moderately Active", max_length=80)
    sleep_hours: float = Field(7.0, ge=0, le=24)
    stress_level: StressLevel = StressLevel.medium
    minutes_per_session: int = Field(60, ge=5, le=300)
    meal_prep_style: str = Field("", max_length=200)
    cuisine_preference: str = Field("", max_length=200)


class RoutineItem(_CamelModel):
    exercise: str
    sets: str = ""
    reps: str = ""
    rest: str = ""


class DailyPlan(_CamelModel):
    day: str
    focus: str = ""
    exercises: List[RoutineItem] = Field(default_factory=list)


class Milestone(_CamelModel):
    month: int = 0
    description: str = ""
    expected_result: str = ""
    habit_to_master: str = ""
    motivational_quote: str = ""


class MealEstimate(_CamelModel):
    name: str = Field(..., min_length=1)
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)


class FitnessPlan(_CamelModel):
    summary: str = ""
    nutrition: NutritionPlan = Field(default_factory=NutritionPlan)
    weekly_schedule: List[DailyPlan] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)


class Recommendation(str, Enum):
    rest = "Rest"
    active_recovery = "Active Recovery"
    maintain = "Maintain"
    push_hard = "Push Hard"


class RecoveryAnalysis(_CamelModel):
    readiness_score: float = Field(..., ge=0, le=100)
    summary: str = ""
    recommendation: Optional[Recommendation] = None
    workout_adjustment: str = ""

    @field_validator("recommendation", mode="before")
    @classmethod
    def _coerce_recommendation(cls, value: object) -> Optional[str]:
        """Models drift on casing ("push hard") and sometimes invent labels; unknown ones become None."""
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in Recommendation:
            if member.value.lower() == wanted:
                return member.value
        return None


# ---- API payloads ----


class PlanRequest(BaseModel):
    profile: UserProfile = Field(default_factory=UserProfile)
    sync_goals: bool = Field(False, description="Replace nutrition goals with the plan's numbers")


class PlanResponse(BaseModel):
    plan: FitnessPlan
    goals: Optional[Goals] = None


class FoodEstimateRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)


class RecoveryAnalyzeResponse(BaseModel):
    analysis: RecoveryAnalysis
    log: SleepLog
