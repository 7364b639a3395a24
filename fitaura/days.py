# -*- coding: utf-8 -*-
"""Calendar day keys.

Every per-day merge in the ledger goes through `day_key`, which truncates a
timestamp to a `YYYY-MM-DD` string in one configured timezone. Naive
timestamps are read as wall-clock time in that zone; aware timestamps are
converted into it first.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import settings
from .errors import InvalidInput

logger = logging.getLogger(__name__)

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DayLike = Union[str, date, datetime]


def resolve_zone(name: str | None = None) -> ZoneInfo:
    zone_name = name or settings.timezone
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", zone_name)
        return ZoneInfo("UTC")


def _parse_iso(iso8601: str) -> Optional[datetime]:
    if not iso8601:
        return None
    # Handle trailing Z.
    value = iso8601.strip().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def parse_timestamp(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    parsed = _parse_iso(value) if isinstance(value, str) else None
    if parsed is None:
        raise InvalidInput(f"Invalid timestamp: {value!r}")
    return parsed


def now(tz: ZoneInfo | str | None = None) -> datetime:
    zone = tz if isinstance(tz, ZoneInfo) else resolve_zone(tz)
    return datetime.now(zone)


def day_key(ts: datetime | str | None = None, tz: ZoneInfo | str | None = None) -> str:
    """Map a timestamp to its calendar day in the configured zone."""
    zone = tz if isinstance(tz, ZoneInfo) else resolve_zone(tz)
    moment = datetime.now(zone) if ts is None else parse_timestamp(ts)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=zone)
    else:
        moment = moment.astimezone(zone)
    return moment.date().isoformat()


def today(tz: ZoneInfo | str | None = None) -> str:
    return day_key(None, tz)


def parse_day(value: object) -> Optional[date]:
    """Strict `YYYY-MM-DD` parse; anything else is None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DAY_RE.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def normalize_day(value: DayLike) -> str:
    """Canonical DayKey for caller-supplied days, or InvalidInput."""
    if isinstance(value, datetime):
        return day_key(value)
    parsed = parse_day(value)
    if parsed is None:
        raise InvalidInput(f"Invalid day key: {value!r} (expected YYYY-MM-DD)")
    return parsed.isoformat()


def shift_day(day: str, days: int) -> str:
    return (date.fromisoformat(day) + timedelta(days=days)).isoformat()


def month_days(year: int, month: int) -> List[date]:
    if not 1 <= month <= 12:
        raise InvalidInput(f"Invalid month: {month}")
    _, count = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, count + 1)]
