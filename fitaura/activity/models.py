# -*- coding: utf-8 -*-
"""Activity — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ActionKind(str, Enum):
    planner = "planner"
    meal = "meal"
    sleep = "sleep"


class ActivityRecord(BaseModel):
    day: str = Field(..., description="YYYY-MM-DD")
    actions: List[ActionKind] = Field(default_factory=list)


class ActivityLogRequest(BaseModel):
    kind: ActionKind
    day: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")


class ActivityLogResponse(BaseModel):
    record: ActivityRecord
    changed: bool


class ActivityRecordsResponse(BaseModel):
    count: int
    records: List[ActivityRecord]


class CalendarDay(BaseModel):
    day_of_month: int = Field(..., ge=1, le=31)
    has_record: bool = False
    is_today: bool = False


class CalendarResponse(BaseModel):
    year: int
    month: int = Field(..., ge=1, le=12)
    days: List[CalendarDay]


class Badge(BaseModel):
    key: str
    title: str
    description: str
    threshold: int = Field(..., ge=1)
    progress: int = Field(0, ge=0)
    earned: bool = False


class ActivityStats(BaseModel):
    today: str
    current_streak: int = Field(0, ge=0)
    active_days: int = Field(0, ge=0)
    total_plans: int = Field(0, ge=0)
    total_meals: int = Field(0, ge=0)
    total_sleep_logs: int = Field(0, ge=0)
    badges: List[Badge] = Field(default_factory=list)
