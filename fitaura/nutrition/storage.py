# -*- coding: utf-8 -*-
"""Nutrition aggregator — meal log, day totals and calorie/macro goals."""

from __future__ import annotations

import logging
import math
import re
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from ..days import day_key, normalize_day, now, parse_timestamp
from ..errors import InvalidInput
from ..store import GOALS_KEY, MEALS_KEY, JsonStore
from .models import DaySummary, Goals, MacroProgress, Meal, NutritionPlan, NutritionTotals

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"\d+")


def parse_macro(value: Any) -> int:
    """Goal value from a plan field: numbers truncate, strings take their first digit run, else 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(0, int(value))
    if isinstance(value, str):
        m = _DIGITS_RE.search(value)
        return int(m.group(0)) if m else 0
    return 0


def progress(current: float, goal: float) -> float:
    """Percent of goal reached, clamped to [0, 100]; 0 when there is no goal."""
    if goal <= 0:
        return 0.0
    return max(0.0, min(100.0, 100.0 * current / goal))


def _as_count(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{field} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInput(f"{field} must be finite")
    if value < 0:
        raise InvalidInput(f"{field} must be >= 0")
    return int(round(value))


def _meals_from_raw(raw: List[Any]) -> List[Meal]:
    meals: List[Meal] = []
    for row in raw:
        if not isinstance(row, dict):
            logger.warning("Discarding non-object meal row: %r", row)
            continue
        data = dict(row)
        # Rows written before `day` existed only carry the timestamp.
        if not data.get("day") and data.get("timestamp"):
            try:
                data["day"] = day_key(data["timestamp"])
            except InvalidInput:
                pass
        try:
            meal = Meal.model_validate(data)
            meal.day = normalize_day(meal.day)
        except (ValidationError, InvalidInput) as exc:
            logger.warning("Discarding invalid meal row %r: %s", row.get("id"), exc)
            continue
        meals.append(meal)
    return meals


def _goals_from_raw(raw: Dict[str, Any]) -> Goals:
    try:
        return Goals.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Discarding invalid goals, using defaults: %s", exc)
        return Goals()


class NutritionAggregator:
    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        # Newest first.
        self._meals = _meals_from_raw(store.load(MEALS_KEY, []))
        self._goals = _goals_from_raw(store.load(GOALS_KEY, {}))

    def _persist_meals(self, meals: List[Meal]) -> None:
        self._store.save(MEALS_KEY, [m.model_dump(mode="json") for m in meals])

    def _persist_goals(self, goals: Goals) -> None:
        self._store.save(GOALS_KEY, goals.model_dump(mode="json"))

    # ---- meals ----

    def add_meal(
        self,
        name: str,
        calories: float,
        protein: float = 0,
        carbs: float = 0,
        fats: float = 0,
        fiber: float = 0,
        timestamp: datetime | str | None = None,
    ) -> Meal:
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name:
            raise InvalidInput("Meal name must not be empty")
        moment = now() if timestamp is None else parse_timestamp(timestamp)
        meal = Meal(
            id=uuid4().hex,
            name=clean_name,
            calories=_as_count(calories, "calories"),
            protein=_as_count(protein, "protein"),
            carbs=_as_count(carbs, "carbs"),
            fats=_as_count(fats, "fats"),
            fiber=_as_count(fiber, "fiber"),
            timestamp=moment.isoformat(),
            day=day_key(moment),
        )
        with self._lock:
            meals = [meal, *self._meals]
            self._persist_meals(meals)
            self._meals = meals
        logger.info("Added meal %s (%d kcal) on %s", meal.id, meal.calories, meal.day)
        return meal

    def remove_meal(self, meal_id: str) -> bool:
        with self._lock:
            kept = [m for m in self._meals if m.id != meal_id]
            if len(kept) == len(self._meals):
                return False
            self._persist_meals(kept)
            self._meals = kept
        logger.info("Removed meal %s", meal_id)
        return True

    def meals(self) -> List[Meal]:
        with self._lock:
            return [m.model_copy() for m in self._meals]

    def meals_for_day(self, day: str) -> List[Meal]:
        key = normalize_day(day)
        with self._lock:
            return [m.model_copy() for m in self._meals if m.day == key]

    def totals_for_day(self, day: str) -> NutritionTotals:
        key = normalize_day(day)
        calories = protein = carbs = fiber = 0
        with self._lock:
            for meal in self._meals:
                if meal.day != key:
                    continue
                calories += meal.calories
                protein += meal.protein
                carbs += meal.carbs
                fiber += meal.fiber
        return NutritionTotals(calories=calories, protein=protein, carbs=carbs, fiber=fiber)

    # ---- goals ----

    @property
    def goals(self) -> Goals:
        with self._lock:
            return self._goals.model_copy()

    def set_goals(self, goals: Goals) -> Goals:
        with self._lock:
            updated = Goals.model_validate(goals.model_dump())
            self._persist_goals(updated)
            self._goals = updated
            current = updated.model_copy()
        logger.info("Goals updated: %s", current.model_dump())
        return current

    def resync_goals_from(self, plan: NutritionPlan | Dict[str, Any]) -> Goals:
        """Replace goals wholesale with the numbers embedded in a generated nutrition plan.

        Each field is parsed on its own; a missing or unreadable value becomes 0
        without affecting the others.
        """
        if isinstance(plan, NutritionPlan):
            raw: Dict[str, Any] = plan.model_dump(by_alias=True)
        else:
            raw = plan if isinstance(plan, dict) else {}
        calories = raw.get("dailyCalories", raw.get("daily_calories"))
        goals = Goals(
            calories=parse_macro(calories),
            protein=parse_macro(raw.get("protein")),
            carbs=parse_macro(raw.get("carbs")),
            fiber=parse_macro(raw.get("fiber")),
        )
        return self.set_goals(goals)

    def day_summary(self, day: str) -> DaySummary:
        key = normalize_day(day)
        totals = self.totals_for_day(key)
        goals = self.goals
        with self._lock:
            meal_count = sum(1 for m in self._meals if m.day == key)
        return DaySummary(
            day=key,
            meal_count=meal_count,
            totals=totals,
            goals=goals,
            progress=MacroProgress(
                calories=progress(totals.calories, goals.calories),
                protein=progress(totals.protein, goals.protein),
                carbs=progress(totals.carbs, goals.carbs),
                fiber=progress(totals.fiber, goals.fiber),
            ),
            calories_remaining=max(0, goals.calories - totals.calories),
        )
