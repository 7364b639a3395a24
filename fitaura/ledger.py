# -*- coding: utf-8 -*-
"""Startup wiring: one store, three ledger components."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import Request

from .activity.storage import ActivityLedger
from .config import settings
from .nutrition.storage import NutritionAggregator
from .recovery.storage import RecoveryHistory
from .store import JsonStore


@dataclass
class Ledger:
    store: JsonStore
    activity: ActivityLedger
    nutrition: NutritionAggregator
    recovery: RecoveryHistory


def open_ledger(data_root: Path | None = None) -> Ledger:
    store = JsonStore(data_root or settings.data_root)
    return Ledger(
        store=store,
        activity=ActivityLedger(store),
        nutrition=NutritionAggregator(store),
        recovery=RecoveryHistory(store),
    )


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger
