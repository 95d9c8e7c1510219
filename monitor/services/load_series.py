"""Daily load aggregation: sparse session records into a dense, zero-filled series."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable

from monitor.models import LoadRecord


@dataclass(frozen=True)
class DailyLoad:
    day: date
    total_load: float


def coerce_load(value: Any) -> float:
    """Numeric load; missing, non-numeric and NaN values count as 0."""
    try:
        load = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(load) else load


def _window_start(days: int, today: date) -> date:
    return today - timedelta(days=days - 1)


def daily_load_series(records: Iterable[LoadRecord], days: int, today: date | None = None) -> list[DailyLoad]:
    """Build a trailing window of ``days`` daily totals, oldest first, ending at ``today``.

    Same-day records are summed. Days without records, and records with a
    missing or malformed load, contribute 0. Records outside the window are ignored.
    """
    if days <= 0:
        return []
    today = today or date.today()
    start = _window_start(days, today)

    totals: dict[date, float] = {}
    for rec in records:
        d = rec.day
        if start <= d <= today:
            totals[d] = totals.get(d, 0.0) + coerce_load(rec.daily_load)

    return [DailyLoad(day=start + timedelta(days=i), total_load=totals.get(start + timedelta(days=i), 0.0)) for i in range(days)]


def load_values(series: list[DailyLoad]) -> list[float]:
    return [d.total_load for d in series]


def records_in_window(records: Iterable[LoadRecord], days: int, today: date | None = None) -> int:
    """Count the load records whose day falls inside the trailing window."""
    if days <= 0:
        return 0
    today = today or date.today()
    start = _window_start(days, today)
    return sum(1 for rec in records if start <= rec.day <= today)


def first_loaded_day(series: list[DailyLoad]) -> int | None:
    """Index of the first day carrying any load, or None for an all-zero series."""
    for idx, d in enumerate(series):
        if d.total_load > 0:
            return idx
    return None
