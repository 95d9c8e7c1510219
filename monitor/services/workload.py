"""Workload ratio and strain engine: ACWR, monotony, strain, and injury-risk tiers.

Acute (7-day) and chronic (28-day) loads are EWMAs over a zero-filled daily
series. Monotony and strain follow Foster (1998); the ACWR risk bands follow
Gabbett (2016), with 0.8-1.3 as the optimal zone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from statistics import mean, pstdev
from typing import Iterable

from monitor.config import Settings, get_settings
from monitor.logging_config import get_logger
from monitor.models import LoadRecord
from monitor.services.ewma import ewma
from monitor.services.load_series import (
    DailyLoad,
    coerce_load,
    daily_load_series,
    first_loaded_day,
    load_values,
    records_in_window,
)
from monitor.services.rounding import round_half_up, round_to

logger = get_logger(__name__)

RISK_LOW = "LOW"
RISK_OPTIMAL = "OPTIMAL"
RISK_HIGH = "HIGH"
RISK_VERY_HIGH = "VERY_HIGH"

# Ordered from least to most severe.
RISK_LEVELS = (RISK_LOW, RISK_OPTIMAL, RISK_HIGH, RISK_VERY_HIGH)

# Returned when a week has zero variance (flat loads, including an all-rest week).
MONOTONY_SENTINEL = 10.0


@dataclass(frozen=True)
class LoadMetrics:
    acwr: float
    acute_load: float
    chronic_load: float
    monotony: float
    strain: float
    risk_level: str
    recommendation: str


@dataclass(frozen=True)
class AcwrTrendPoint:
    day: date
    acwr: float
    acute_load: float
    chronic_load: float


@dataclass(frozen=True)
class WeeklyLoadSummary:
    week_number: int
    week_start: date
    total_load: float
    session_count: int
    avg_session_load: float
    avg_rpe: float
    load_change_pct: int  # vs previous week, 0 when there is no previous load


@dataclass(frozen=True)
class LoadAlert:
    """An alert the caller may persist; the engine never stores it."""
    alert_type: str   # "ACWR_CRITICAL" | "ACWR_HIGH" | "MONOTONY"
    severity: str     # "HIGH" | "MEDIUM" | "LOW"
    message: str


@dataclass(frozen=True)
class LoadRange:
    min_load: int
    max_load: int
    target_load: int
    message: str


def calculate_monotony(loads: list[float]) -> float:
    """Mean / population stdev of daily loads. Flat weeks return the sentinel 10.0."""
    if not loads:
        return 0.0
    sd = pstdev(loads)
    if sd == 0:
        return MONOTONY_SENTINEL
    return mean(loads) / sd


def calculate_strain(loads: list[float], monotony: float) -> float:
    """Weekly load multiplied by monotony."""
    return sum(loads) * monotony


def classify_acwr_risk(acwr: float, settings: Settings | None = None) -> tuple[str, str]:
    """Map an ACWR value to (risk_level, recommendation).

    Lower bounds are exclusive: exactly 1.3 is OPTIMAL, exactly 1.5 is HIGH.
    """
    settings = settings or get_settings()
    if acwr > settings.acwr_very_high:
        return RISK_VERY_HIGH, "Immediate load reduction required"
    if acwr > settings.acwr_high:
        return RISK_HIGH, "Consider reducing training load"
    if acwr > settings.acwr_low:
        return RISK_OPTIMAL, "Optimal training zone"
    return RISK_LOW, "Consider gradually increasing load"


def _chronic_window(series: list[DailyLoad], settings: Settings) -> list[float]:
    values = load_values(series)
    if settings.chronic_window_policy != "history":
        return values
    first = first_loaded_day(series)
    if first is None:
        return values
    # Never shorter than the acute window
    start = min(first, max(0, len(values) - settings.acute_decay_days))
    return values[start:]


def compute_load_metrics(
    records: Iterable[LoadRecord],
    today: date | None = None,
    settings: Settings | None = None,
) -> LoadMetrics | None:
    """Compute current ACWR, monotony, strain and risk tier from an athlete's load records.

    Returns None when fewer than ``settings.min_load_records`` records fall in
    the chronic window; callers must treat that as "insufficient data".
    """
    settings = settings or get_settings()
    records = list(records)
    window = settings.chronic_decay_days

    found = records_in_window(records, window, today)
    if found < settings.min_load_records:
        logger.debug("Insufficient load history: %d records in %d-day window", found, window)
        return None

    series = daily_load_series(records, window, today)
    week = load_values(series)[-settings.acute_decay_days:]

    acute = ewma(week, settings.acute_decay_days)
    chronic = ewma(_chronic_window(series, settings), settings.chronic_decay_days)
    acwr = acute / chronic if chronic > 0 else 0.0
    monotony = calculate_monotony(week)
    strain = calculate_strain(week, monotony)
    risk_level, recommendation = classify_acwr_risk(acwr, settings)

    return LoadMetrics(
        acwr=round_to(acwr, 2),
        acute_load=round_half_up(acute),
        chronic_load=round_half_up(chronic),
        monotony=round_to(monotony, 2),
        strain=round_half_up(strain),
        risk_level=risk_level,
        recommendation=recommendation,
    )


def acwr_trend(
    records: Iterable[LoadRecord],
    days: int = 30,
    today: date | None = None,
    settings: Settings | None = None,
) -> list[AcwrTrendPoint]:
    """Daily rolling ACWR for the last ``days`` days (plus today).

    Each point uses the 7 days and the 28 days ending on that day. Needs at
    least 28 load records in the combined window; returns [] otherwise.
    """
    settings = settings or get_settings()
    records = list(records)
    today = today or date.today()
    chronic_days = settings.chronic_decay_days
    acute_days = settings.acute_decay_days
    total_days = days + chronic_days

    if records_in_window(records, total_days, today) < chronic_days:
        return []

    loads = load_values(daily_load_series(records, total_days, today))
    trend: list[AcwrTrendPoint] = []
    for i in range(chronic_days - 1, len(loads)):
        acute = ewma(loads[i - acute_days + 1:i + 1], acute_days)
        chronic = ewma(loads[max(0, i - chronic_days + 1):i + 1], chronic_days)
        acwr = acute / chronic if chronic > 0 else 0.0
        trend.append(AcwrTrendPoint(
            day=today - timedelta(days=len(loads) - 1 - i),
            acwr=round_to(acwr, 2),
            acute_load=round_half_up(acute),
            chronic_load=round_half_up(chronic),
        ))
    return trend


def weekly_load_summary(
    records: Iterable[LoadRecord],
    weeks: int = 8,
    today: date | None = None,
) -> list[WeeklyLoadSummary]:
    """Summarise consecutive 7-day blocks, oldest first, with the last block ending today."""
    records = list(records)
    today = today or date.today()
    summaries: list[WeeklyLoadSummary] = []
    previous_load = 0.0

    for week in range(weeks):
        week_start = today - timedelta(days=(weeks - week) * 7 - 1)
        week_end = week_start + timedelta(days=6)
        in_week = [r for r in records if week_start <= r.day <= week_end]

        total = sum(coerce_load(r.daily_load) for r in in_week)
        rpes = [r.session_rpe for r in in_week if r.session_rpe is not None]
        change = (total - previous_load) / previous_load * 100 if previous_load > 0 else 0.0

        summaries.append(WeeklyLoadSummary(
            week_number=week + 1,
            week_start=week_start,
            total_load=total,
            session_count=len(in_week),
            avg_session_load=round_to(total / len(in_week), 1) if in_week else 0.0,
            avg_rpe=round_to(mean(rpes), 1) if rpes else 0.0,
            load_change_pct=round_half_up(change),
        ))
        previous_load = total

    return summaries


def load_alerts(metrics: LoadMetrics | None, settings: Settings | None = None) -> list[LoadAlert]:
    """Alerts implied by the current metrics, most severe first."""
    if metrics is None:
        return []
    settings = settings or get_settings()
    alerts: list[LoadAlert] = []

    if metrics.acwr > settings.acwr_very_high:
        alerts.append(LoadAlert(
            alert_type="ACWR_CRITICAL",
            severity="HIGH",
            message=f"ACWR is {metrics.acwr:.2f} - very high injury risk. Immediate load reduction recommended.",
        ))
    elif metrics.acwr > settings.acwr_high:
        alerts.append(LoadAlert(
            alert_type="ACWR_HIGH",
            severity="MEDIUM",
            message=f"ACWR is {metrics.acwr:.2f} - elevated injury risk. Monitor closely.",
        ))

    if metrics.monotony > settings.monotony_alert_threshold:
        alerts.append(LoadAlert(
            alert_type="MONOTONY",
            severity="LOW",
            message="Training monotony is high. Consider varying session types.",
        ))

    return alerts


def optimal_load_range(chronic_load: float, settings: Settings | None = None) -> LoadRange:
    """Next-week load range that keeps ACWR inside the optimal band."""
    settings = settings or get_settings()
    min_load = round_half_up(chronic_load * settings.acwr_low * 7)
    max_load = round_half_up(chronic_load * settings.acwr_high * 7)
    target_load = round_half_up(chronic_load * 7)
    return LoadRange(
        min_load=min_load,
        max_load=max_load,
        target_load=target_load,
        message=f"Target weekly load: {target_load} AU (range: {min_load} - {max_load} AU) to maintain optimal ACWR",
    )
