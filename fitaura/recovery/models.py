# -*- coding: utf-8 -*-
"""Recovery — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SleepQuality(str, Enum):
    poor = "Poor"
    fair = "Fair"
    good = "Good"
    excellent = "Excellent"


class Soreness(str, Enum):
    none = "None"
    low = "Low"
    medium = "Medium"
    high = "High"


class ScoreBand(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class SleepLog(BaseModel):
    id: str
    day: str = Field(..., description="YYYY-MM-DD")
    hours: float = Field(..., ge=0, le=24)
    quality: SleepQuality
    soreness: Soreness
    readiness_score: Optional[int] = Field(None, ge=0, le=100)
    feedback: Optional[str] = None


class SleepInput(BaseModel):
    hours: float = Field(7.0, ge=0, le=24)
    quality: SleepQuality = SleepQuality.good
    soreness: Soreness = Soreness.low


class RecordAnalysisRequest(SleepInput):
    day: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")
    readiness_score: Optional[int] = Field(None, ge=0, le=100)
    feedback: Optional[str] = Field(None, max_length=4000)


class AnalyzeRequest(SleepInput):
    day: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")


class SleepLogResponse(BaseModel):
    log: SleepLog
    band: Optional[ScoreBand] = None


class SleepHistoryResponse(BaseModel):
    count: int
    logs: List[SleepLog]
