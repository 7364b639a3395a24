# -*- coding: utf-8 -*-
"""Recovery history — one sleep log per day, newest day first."""

from __future__ import annotations

import logging
import math
import threading
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from ..days import normalize_day
from ..errors import InvalidInput
from ..store import SLEEP_KEY, JsonStore
from .models import ScoreBand, SleepLog, SleepQuality, Soreness

logger = logging.getLogger(__name__)


def score_band(score: float) -> ScoreBand:
    if score >= 80:
        return ScoreBand.high
    if score >= 60:
        return ScoreBand.medium
    return ScoreBand.low


def _coerce_enum(enum_cls, value: Any, field: str):
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if isinstance(value, str) and value.strip().lower() == member.value.lower():
            return member
    raise InvalidInput(f"Invalid {field}: {value!r}")


def _logs_from_raw(raw: List[Any]) -> List[SleepLog]:
    logs: List[SleepLog] = []
    seen: set[str] = set()
    for row in raw:
        if not isinstance(row, dict):
            logger.warning("Discarding non-object sleep row: %r", row)
            continue
        data = dict(row)
        # Older payloads used `date` / `aiFeedback` / `readinessScore`.
        if "day" not in data and "date" in data:
            data["day"] = data.pop("date")
        if "feedback" not in data and "aiFeedback" in data:
            data["feedback"] = data.pop("aiFeedback")
        if "readiness_score" not in data and "readinessScore" in data:
            data["readiness_score"] = data.pop("readinessScore")
        try:
            log = SleepLog.model_validate(data)
            log.day = normalize_day(log.day)
        except (ValidationError, InvalidInput) as exc:
            logger.warning("Discarding invalid sleep row %r: %s", row.get("id"), exc)
            continue
        # Stored order is newest first, so the first entry per day wins.
        if log.day in seen:
            continue
        seen.add(log.day)
        logs.append(log)
    logs.sort(key=lambda log: log.day, reverse=True)
    return logs


class RecoveryHistory:
    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._logs = _logs_from_raw(store.load(SLEEP_KEY, []))

    def _persist(self, logs: List[SleepLog]) -> None:
        self._store.save(SLEEP_KEY, [log.model_dump(mode="json") for log in logs])

    def record_analysis(
        self,
        day: str,
        hours: float,
        quality: SleepQuality | str,
        soreness: Soreness | str,
        readiness_score: Optional[float] = None,
        feedback: Optional[str] = None,
    ) -> SleepLog:
        """Store the analysis for `day`, replacing whatever was recorded for that day before."""
        key = normalize_day(day)
        if isinstance(hours, bool) or not isinstance(hours, (int, float)) or not math.isfinite(hours):
            raise InvalidInput("hours must be a number")
        if not 0 <= hours <= 24:
            raise InvalidInput("hours must be within [0, 24]")
        score: Optional[int] = None
        if readiness_score is not None:
            if isinstance(readiness_score, bool) or not isinstance(readiness_score, (int, float)):
                raise InvalidInput("readiness_score must be a number")
            if not math.isfinite(readiness_score) or not 0 <= readiness_score <= 100:
                raise InvalidInput("readiness_score must be within [0, 100]")
            score = int(round(readiness_score))

        log = SleepLog(
            id=uuid4().hex,
            day=key,
            hours=float(hours),
            quality=_coerce_enum(SleepQuality, quality, "quality"),
            soreness=_coerce_enum(Soreness, soreness, "soreness"),
            readiness_score=score,
            feedback=feedback,
        )
        with self._lock:
            logs = [existing for existing in self._logs if existing.day != key]
            logs.insert(0, log)
            # Backfilled days still land in day order; sort is stable for ties.
            logs.sort(key=lambda entry: entry.day, reverse=True)
            self._persist(logs)
            self._logs = logs
        logger.info("Recorded sleep analysis for %s (score=%s)", key, score)
        return log

    def latest_for_day(self, day: str) -> Optional[SleepLog]:
        key = normalize_day(day)
        with self._lock:
            for log in self._logs:
                if log.day == key:
                    return log.model_copy()
        return None

    def history(self, limit: Optional[int] = None) -> List[SleepLog]:
        with self._lock:
            logs = self._logs if limit is None else self._logs[: max(limit, 0)]
            return [log.model_copy() for log in logs]
