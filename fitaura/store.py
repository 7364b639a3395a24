# -*- coding: utf-8 -*-
"""Ledger persistence — one JSON document per storage key."""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from .errors import CorruptPersistedState

logger = logging.getLogger(__name__)

ACTIVITY_KEY = "activity"
MEALS_KEY = "meals"
GOALS_KEY = "goals"
SLEEP_KEY = "sleep"


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


class JsonStore:
    """Read-on-init, write-through key/value store backed by `<root>/<key>.json`."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def _decode(self, fp: Path) -> Any:
        try:
            return json.loads(fp.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CorruptPersistedState(f"{fp.name}: {exc}") from exc

    def load(self, key: str, default: Any) -> Any:
        """Stored value for `key`, or a copy of `default` when missing or unreadable.

        A stored value whose JSON type differs from the default's (e.g. an
        object where a list is expected) counts as corrupt.
        """
        fp = self.path_for(key)
        if not fp.exists():
            return copy.deepcopy(default)
        try:
            value = self._decode(fp)
            if default is not None and not isinstance(value, type(default)):
                raise CorruptPersistedState(
                    f"{fp.name}: expected {type(default).__name__}, got {type(value).__name__}"
                )
        except CorruptPersistedState as exc:
            logger.warning("Discarding corrupt persisted state: %s", exc)
            return copy.deepcopy(default)
        return value

    def save(self, key: str, value: Any) -> None:
        fp = self.path_for(key)
        _ensure_dir(fp.parent)
        tmp = fp.with_name(f".{fp.name}.tmp")
        tmp.write_text(json.dumps(value, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, fp)
