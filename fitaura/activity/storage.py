# -*- coding: utf-8 -*-
"""Activity ledger — one record per calendar day, streaks and the monthly calendar."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..days import month_days, normalize_day, parse_day, shift_day
from ..errors import InvalidInput
from ..store import ACTIVITY_KEY, JsonStore
from .models import ActionKind, ActivityRecord, ActivityStats, Badge, CalendarDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _BadgeRule:
    key: str
    title: str
    description: str
    threshold: int
    metric: str  # "streak" | "meals"


BADGE_RULES = (
    _BadgeRule("ignition", "Ignition", "3 Day Streak", 3, "streak"),
    _BadgeRule("momentum", "Momentum", "7 Day Streak", 7, "streak"),
    _BadgeRule("fueled_up", "Fueled Up", "Log 10 Meals", 10, "meals"),
)


def _coerce_kind(value: Any) -> Optional[ActionKind]:
    if isinstance(value, ActionKind):
        return value
    try:
        return ActionKind(str(value).strip().lower())
    except ValueError:
        return None


def _require_kind(value: Any) -> ActionKind:
    kind = _coerce_kind(value)
    if kind is None:
        raise InvalidInput(f"Unknown action kind: {value!r}")
    return kind


def _records_from_raw(raw: List[Any]) -> Dict[str, List[ActionKind]]:
    """Rebuild the day index from persisted rows, dropping rows that can't be trusted."""
    by_day: Dict[str, List[ActionKind]] = {}
    for row in raw:
        if not isinstance(row, dict):
            logger.warning("Discarding non-object activity row: %r", row)
            continue
        # Older payloads used `date` instead of `day`.
        parsed = parse_day(row.get("day", row.get("date")))
        if parsed is None:
            logger.warning("Discarding activity row with bad day key: %r", row)
            continue
        actions = by_day.setdefault(parsed.isoformat(), [])
        raw_actions = row.get("actions")
        if not isinstance(raw_actions, list):
            continue
        for value in raw_actions:
            kind = _coerce_kind(value)
            if kind is not None and kind not in actions:
                actions.append(kind)
    return by_day


def _as_records(by_day: Dict[str, List[ActionKind]]) -> List[ActivityRecord]:
    return [ActivityRecord(day=d, actions=list(by_day[d])) for d in sorted(by_day)]


class ActivityLedger:
    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._by_day = _records_from_raw(store.load(ACTIVITY_KEY, []))

    def _persist(self, by_day: Dict[str, List[ActionKind]]) -> None:
        self._store.save(ACTIVITY_KEY, [r.model_dump(mode="json") for r in _as_records(by_day)])

    def records(self) -> List[ActivityRecord]:
        with self._lock:
            return _as_records(self._by_day)

    def record_for(self, day: str) -> Optional[ActivityRecord]:
        key = normalize_day(day)
        with self._lock:
            actions = self._by_day.get(key)
            return ActivityRecord(day=key, actions=list(actions)) if actions is not None else None

    def has_record(self, day: str) -> bool:
        key = normalize_day(day)
        with self._lock:
            return key in self._by_day

    def log_action(self, day: str, kind: ActionKind) -> bool:
        """Idempotent upsert. Returns True when the ledger changed."""
        key = normalize_day(day)
        kind = _require_kind(kind)
        with self._lock:
            actions = self._by_day.get(key, [])
            if kind in actions:
                return False
            by_day = dict(self._by_day)
            by_day[key] = [*actions, kind]
            self._persist(by_day)
            self._by_day = by_day
        logger.info("Logged %s activity for %s", kind.value, key)
        return True

    def current_streak(self, today: str) -> int:
        """Consecutive recorded days ending at today, or at yesterday if today is still empty."""
        anchor = normalize_day(today)
        with self._lock:
            if anchor not in self._by_day:
                anchor = shift_day(anchor, -1)
                if anchor not in self._by_day:
                    return 0
            streak = 0
            cursor = anchor
            while cursor in self._by_day:
                streak += 1
                cursor = shift_day(cursor, -1)
            return streak

    def month_calendar(self, year: int, month: int, today: str) -> List[CalendarDay]:
        today_key = normalize_day(today)
        with self._lock:
            return [
                CalendarDay(
                    day_of_month=d.day,
                    has_record=d.isoformat() in self._by_day,
                    is_today=d.isoformat() == today_key,
                )
                for d in month_days(year, month)
            ]

    def count_by_kind(self, kind: ActionKind) -> int:
        kind = _require_kind(kind)
        with self._lock:
            return sum(1 for actions in self._by_day.values() if kind in actions)

    def badges(self, today: str) -> List[Badge]:
        metrics = {
            "streak": self.current_streak(today),
            "meals": self.count_by_kind(ActionKind.meal),
        }
        return [
            Badge(
                key=rule.key,
                title=rule.title,
                description=rule.description,
                threshold=rule.threshold,
                progress=metrics[rule.metric],
                earned=metrics[rule.metric] >= rule.threshold,
            )
            for rule in BADGE_RULES
        ]

    def stats(self, today: str) -> ActivityStats:
        today_key = normalize_day(today)
        with self._lock:
            active_days = len(self._by_day)
        return ActivityStats(
            today=today_key,
            current_streak=self.current_streak(today_key),
            active_days=active_days,
            total_plans=self.count_by_kind(ActionKind.planner),
            total_meals=self.count_by_kind(ActionKind.meal),
            total_sleep_logs=self.count_by_kind(ActionKind.sleep),
            badges=self.badges(today_key),
        )
