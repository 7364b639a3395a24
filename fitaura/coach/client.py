# -*- coding: utf-8 -*-
"""Coach — Gemini generateContent calls (plan, food macros, recovery readiness).

Call-and-fail: one request per operation, no retries. Anything that goes
wrong surfaces as `CollaboratorError` so callers never feed a half-parsed
answer into the ledger.
"""

from __future__ import annotations

import ast
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..errors import CollaboratorError
from ..recovery.models import SleepQuality, Soreness
from .models import FitnessPlan, MealEstimate, RecoveryAnalysis, UserProfile

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class CoachSettings:
    api_key: Optional[str]
    base_url: str
    model: str
    timeout: float


def resolve_coach_settings() -> CoachSettings:
    return CoachSettings(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        model=settings.gemini_model,
        timeout=settings.gemini_timeout,
    )


_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def _object_span(text: str) -> Optional[str]:
    """Outermost {...} of a reply; JSON mode normally returns nothing else."""
    cleaned = _FENCE_RE.sub("", text.strip())
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start < 0 or end <= start:
        return None
    return cleaned[start : end + 1]


def parse_model_output_json(content: str) -> Dict[str, Any]:
    candidate = _object_span(content or "")
    if candidate is None:
        raise CollaboratorError("Failed to parse model JSON: no JSON object found")

    relaxed = _TRAILING_COMMA_RE.sub(r"\1", candidate)
    last_error: Exception | None = None
    for attempt in (candidate, relaxed):
        try:
            # NaN and Infinity become null.
            parsed = json.loads(attempt, parse_constant=lambda _: None)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue
        if isinstance(parsed, dict):
            return parsed

    # Python-literal dicts (single quotes, None/True/False).
    py = re.sub(r"\bnull\b", "None", relaxed)
    py = re.sub(r"\btrue\b", "True", py)
    py = re.sub(r"\bfalse\b", "False", py)
    try:
        parsed = ast.literal_eval(py)
    except (ValueError, SyntaxError) as exc:
        last_error = exc
    else:
        if isinstance(parsed, dict):
            return parsed

    raise CollaboratorError(f"Failed to parse model JSON: {last_error or 'not an object'}")


def _extract_text(data: object) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    out: list[str] = []
    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            out.append(part["text"])
    return "".join(out)


def _extract_error(data: object) -> str | None:
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if not isinstance(err, dict):
        return None
    message = err.get("message")
    if not isinstance(message, str) or not message.strip():
        return None
    status = err.get("status") or err.get("code")
    return f"{status}: {message.strip()}" if status else message.strip()


def generate_json(prompt: str, *, cfg: CoachSettings | None = None) -> Dict[str, Any]:
    cfg = cfg or resolve_coach_settings()
    if not cfg.api_key:
        raise CollaboratorError("GEMINI_API_KEY is not configured")

    url = f"{cfg.base_url}/models/{cfg.model}:generateContent"
    payload: Dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"responseMimeType": "application/json"},
    }
    headers = {"Content-Type": "application/json", "x-goog-api-key": cfg.api_key}

    try:
        with httpx.Client(timeout=cfg.timeout) as client:
            resp = client.post(url, headers=headers, json=payload)
    except httpx.HTTPError as exc:
        logger.warning("Gemini request failed: %s", exc)
        raise CollaboratorError(f"Gemini request failed: {exc}") from exc

    try:
        data = resp.json()
    except ValueError:
        data = None

    if resp.status_code >= 400:
        detail = _extract_error(data) or f"HTTP {resp.status_code}"
        logger.warning("Gemini returned an error: %s", detail)
        raise CollaboratorError(f"Gemini error: {detail}")

    text = _extract_text(data)
    if not text.strip():
        raise CollaboratorError("No data received from Gemini")
    return parse_model_output_json(text)


def _validate(model_cls: Type[ModelT], parsed: Dict[str, Any]) -> ModelT:
    try:
        return model_cls.model_validate(parsed)
    except ValidationError as exc:
        logger.warning("Gemini output did not match %s: %s", model_cls.__name__, exc)
        raise CollaboratorError(f"Malformed {model_cls.__name__} from Gemini") from exc


def generate_plan(profile: UserProfile, *, cfg: CoachSettings | None = None) -> FitnessPlan:
    prompt = (
        "Create a personalized fitness and nutrition plan for this user profile.\n"
        f"Profile (JSON): {profile.model_dump_json(by_alias=True)}\n"
        "Return STRICT JSON with keys: summary (string); nutrition {dailyCalories (number), "
        "protein, carbs, fats, fiber (strings like '150g'), keyFoods (string[])}; "
        "weeklySchedule [{day, focus, exercises [{exercise, sets, reps, rest}]}]; "
        "milestones [{month, description, expectedResult, habitToMaster, motivationalQuote}]."
    )
    return _validate(FitnessPlan, generate_json(prompt, cfg=cfg))


def analyze_food(description: str, *, cfg: CoachSettings | None = None) -> MealEstimate:
    prompt = (
        f'Analyze the nutritional content of the following food item/meal: "{description}".\n'
        "Estimate the portion size if not specified (default to average serving).\n"
        "Return STRICT JSON: {name (short clean name), calories, protein, carbs, fats, fiber} "
        "with numbers in kcal and grams."
    )
    return _validate(MealEstimate, generate_json(prompt, cfg=cfg))


def analyze_recovery(
    hours: float,
    quality: SleepQuality,
    soreness: Soreness,
    *,
    cfg: CoachSettings | None = None,
) -> RecoveryAnalysis:
    prompt = (
        f"Analyze recovery for a user who slept {hours} hours with '{quality.value}' quality "
        f"and has '{soreness.value}' muscle soreness.\n"
        "Return STRICT JSON: {readinessScore (0-100), summary, "
        "recommendation (one of Rest, Active Recovery, Maintain, Push Hard), workoutAdjustment}."
    )
    return _validate(RecoveryAnalysis, generate_json(prompt, cfg=cfg))
