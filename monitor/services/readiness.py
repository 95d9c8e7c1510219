"""Readiness scoring from subjective wellness check-ins.

The score is a weighted average over whichever fields are present: absent
fields drop out of both numerator and denominator rather than counting as 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from statistics import mean
from typing import Iterable

from monitor.config import Settings, get_settings
from monitor.models import WellnessRecord
from monitor.services.rounding import round_half_up

NEUTRAL_SCORE = 50
INVERTED_FIELDS = frozenset({"stress", "muscle_soreness"})

# Lower bound (inclusive) for each category, highest first.
CATEGORY_BOUNDS = (
    (85, "OPTIMAL"),
    (70, "GOOD"),
    (55, "MODERATE"),
    (40, "LOW"),
)


@dataclass(frozen=True)
class ReadinessComponents:
    """Display breakdown; not used for the score itself."""
    sleep: int
    cardiac: int
    fatigue: int
    mental: int
    hydration: int


@dataclass(frozen=True)
class ReadinessResult:
    score: int
    category: str
    components: ReadinessComponents
    recommendation: str


@dataclass(frozen=True)
class DailyReadiness:
    athlete_id: str
    day: date
    score: int
    category: str
    components: ReadinessComponents
    recommendation: str


def readiness_score(wellness: WellnessRecord, weights: dict[str, float] | None = None) -> int:
    """Weighted 0-100 readiness score; 50 when no weighted field is present."""
    weights = weights or get_settings().readiness_weights
    score = 0.0
    total_weight = 0.0
    for field_name, weight in weights.items():
        value = getattr(wellness, field_name, None)
        if value is None:
            continue
        fraction = (10 - value) / 10 if field_name in INVERTED_FIELDS else value / 10
        score += fraction * weight * 100
        total_weight += weight
    if total_weight <= 0:
        return NEUTRAL_SCORE
    return round_half_up(score / total_weight)


def readiness_category(score: float) -> str:
    for bound, category in CATEGORY_BOUNDS:
        if score >= bound:
            return category
    return "CRITICAL"


def readiness_recommendation(score: float) -> str:
    if score >= 85:
        return "Optimal readiness - cleared for high-intensity training"
    if score >= 70:
        return "Good readiness - proceed with planned training"
    if score >= 55:
        return "Moderate readiness - consider reducing intensity by 10-15%"
    if score >= 40:
        return "Low readiness - reduce volume and intensity significantly"
    return "Very low readiness - active recovery or rest day recommended"


def readiness_components(wellness: WellnessRecord) -> ReadinessComponents:
    """Per-domain 0-100 breakdown; each component is 50 when its source is missing.

    Cardiac scores resting HR deviation from a 55 bpm baseline.
    """
    w = wellness
    return ReadinessComponents(
        sleep=w.sleep_quality * 10 if w.sleep_quality is not None else NEUTRAL_SCORE,
        cardiac=max(0, 100 - abs(w.resting_hr - 55) * 2) if w.resting_hr is not None else NEUTRAL_SCORE,
        fatigue=(10 - w.fatigue) * 10 if w.fatigue is not None else NEUTRAL_SCORE,
        mental=(10 - w.stress + w.mood) * 5 if w.mood is not None and w.stress is not None else NEUTRAL_SCORE,
        hydration=w.hydration_status * 10 if w.hydration_status is not None else NEUTRAL_SCORE,
    )


def assess_readiness(wellness: WellnessRecord, settings: Settings | None = None) -> ReadinessResult:
    """Score a single check-in and attach category, components and recommendation."""
    settings = settings or get_settings()
    score = readiness_score(wellness, settings.readiness_weights)
    return ReadinessResult(
        score=score,
        category=readiness_category(score),
        components=readiness_components(wellness),
        recommendation=readiness_recommendation(score),
    )


def readiness_history(records: Iterable[WellnessRecord], settings: Settings | None = None) -> list[DailyReadiness]:
    """Score every check-in, oldest first."""
    settings = settings or get_settings()
    history = []
    for rec in sorted(records, key=lambda r: r.log_date):
        result = assess_readiness(rec, settings)
        history.append(DailyReadiness(
            athlete_id=rec.athlete_id,
            day=rec.log_date,
            score=result.score,
            category=result.category,
            components=result.components,
            recommendation=result.recommendation,
        ))
    return history


def readiness_alerts(recent: Iterable[WellnessRecord], settings: Settings | None = None) -> list[str]:
    """Coach-facing warnings from the last seven check-ins.

    Averages only cover check-ins that carry the field in question.
    """
    settings = settings or get_settings()
    last_week = sorted(recent, key=lambda r: r.log_date, reverse=True)[:7]
    if not last_week:
        return ["No recent wellness data - please submit daily check-ins"]

    alerts: list[str] = []
    if len(last_week) >= 3:
        avg_recent = mean(readiness_score(w, settings.readiness_weights) for w in last_week[:3])
        if avg_recent < 60:
            alerts.append("Readiness has been low for 3+ days - consider reducing training load")

    sleep = [w.sleep_duration for w in last_week if w.sleep_duration is not None]
    if sleep and mean(sleep) < 6:
        alerts.append("Average sleep is below 6 hours - prioritize sleep recovery")

    fatigue = [w.fatigue for w in last_week if w.fatigue is not None]
    if fatigue and mean(fatigue) > 7:
        alerts.append("Fatigue levels are elevated - recovery session recommended")

    soreness = [w.muscle_soreness for w in last_week if w.muscle_soreness is not None]
    if soreness and mean(soreness) > 7:
        alerts.append("Muscle soreness is high - consider active recovery or massage")

    return alerts
