"""Session engine: scales template sessions to the athlete's current state.

Readiness, ACWR and fatigue type each contribute additive percentage deltas to
intensity and volume. Deltas accumulate within each axis, then apply
multiplicatively: load scales with both axes, duration with volume only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from monitor.config import Settings, get_settings
from monitor.services.rounding import round_half_up, round_to

SESSION_BASE_DURATION = {
    "SPEED": 90,
    "SPEED_ENDURANCE": 100,
    "TEMPO": 80,
    "STRENGTH": 75,
    "RECOVERY": 45,
    "COMPETITION": 60,
}
DEFAULT_BASE_DURATION = 90
WARMUP_MIN = 20
COOLDOWN_MIN = 15

LOW_READINESS = 60
HIGH_READINESS = 85


@dataclass(frozen=True)
class SessionTemplate:
    session_type: str
    phase: str
    base_duration: int  # minutes
    base_load: float
    warmup_min: int = WARMUP_MIN
    main_min: int = 0
    cooldown_min: int = COOLDOWN_MIN
    notes: tuple[str, ...] = ()


@dataclass
class AdjustedSession:
    session_type: str
    phase: str
    duration: int
    load: float
    intensity_change: int = 0  # percent
    volume_change: int = 0     # percent
    reasons: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        return "; ".join(self.reasons)

    @property
    def adjusted(self) -> bool:
        return bool(self.reasons)


@dataclass(frozen=True)
class SessionRecommendation:
    recommended_type: str
    readiness: float
    reasoning: list[str]


@dataclass(frozen=True)
class PlannedSession:
    day: date
    session: AdjustedSession


def build_session_template(session_type: str, phase: str, week_in_phase: int = 1) -> SessionTemplate:
    """Base template for a session type; unknown types get a 90-minute, 100-load default."""
    base_duration = SESSION_BASE_DURATION.get(session_type, DEFAULT_BASE_DURATION)
    if session_type == "SPEED":
        base_load = 150.0
    elif session_type == "RECOVERY":
        base_load = 50.0
    else:
        base_load = 100.0
    return SessionTemplate(
        session_type=session_type,
        phase=phase,
        base_duration=base_duration,
        base_load=base_load,
        main_min=max(0, base_duration - WARMUP_MIN - COOLDOWN_MIN),
        notes=(f"{phase} phase - Week {week_in_phase}",),
    )


def adjust_session(
    template: SessionTemplate,
    readiness_score: float,
    acwr: float,
    fatigue_type: str,
    settings: Settings | None = None,
) -> AdjustedSession:
    """Apply readiness, workload-ratio and fatigue-type rules to a template.

    Rules are evaluated in that order and every rule that fires adds a reason.
    Unknown fatigue types fire nothing.
    """
    settings = settings or get_settings()
    intensity = 0
    volume = 0
    reasons: list[str] = []

    if readiness_score < LOW_READINESS:
        intensity -= 15
        volume -= 20
        reasons.append("Low readiness - reducing intensity and volume")
    elif readiness_score >= HIGH_READINESS:
        intensity += 5
        reasons.append("Optimal readiness - slight intensity increase")

    if acwr > settings.acwr_high:
        volume -= 15
        reasons.append("High ACWR - reducing volume")
    elif acwr < settings.acwr_low:
        volume += 10
        reasons.append("Low ACWR - can increase volume")

    if fatigue_type == "neural":
        intensity -= 10
        reasons.append("Neural fatigue detected - reducing intensity")
    elif fatigue_type == "mechanical":
        volume -= 10
        reasons.append("Mechanical fatigue detected - reducing volume")

    volume_factor = 1 + volume / 100
    return AdjustedSession(
        session_type=template.session_type,
        phase=template.phase,
        duration=round_half_up(template.base_duration * volume_factor),
        load=round_to(template.base_load * (1 + intensity / 100) * volume_factor, 1),
        intensity_change=intensity,
        volume_change=volume,
        reasons=reasons,
        notes=[*template.notes, *reasons],
    )


def recommend_session_type(readiness: float, acwr: float, settings: Settings | None = None) -> SessionRecommendation:
    """Pick the session type best suited to today's readiness and workload ratio."""
    settings = settings or get_settings()
    reasoning: list[str] = []

    if readiness < 50:
        recommended = "REST"
        reasoning.append("Readiness is very low - rest day recommended")
    elif readiness < 65:
        recommended = "RECOVERY"
        reasoning.append("Readiness is below optimal - light recovery session recommended")
    elif acwr > settings.acwr_high:
        recommended = "TEMPO"
        reasoning.append("ACWR is elevated - moderate intensity session to manage load")
    elif readiness >= HIGH_READINESS:
        recommended = "SPEED"
        reasoning.append("Optimal readiness - cleared for high-intensity speed work")
    else:
        recommended = "STRENGTH"
        reasoning.append("Good readiness - strength or speed-endurance work appropriate")

    if acwr < settings.acwr_low:
        reasoning.append("ACWR is low - can progressively increase training load")

    return SessionRecommendation(recommended_type=recommended, readiness=readiness, reasoning=reasoning)


def weekly_structure(phase: str, category: str) -> list[str]:
    """Seven-day session pattern (Monday first) for a training phase.

    Senior and elite athletes get an extra session in most phases.
    """
    elite = category in ("SENIOR", "ELITE")
    if phase == "GPP":
        if elite:
            return ["STRENGTH", "TEMPO", "STRENGTH", "REST", "TEMPO", "STRENGTH", "REST"]
        return ["STRENGTH", "TEMPO", "REST", "STRENGTH", "TEMPO", "REST", "REST"]
    if phase == "SPP1":
        if elite:
            return ["SPEED", "STRENGTH", "TEMPO", "REST", "SPEED_ENDURANCE", "STRENGTH", "REST"]
        return ["SPEED", "STRENGTH", "REST", "SPEED_ENDURANCE", "TEMPO", "REST", "REST"]
    if phase == "SPP2":
        if elite:
            return ["SPEED", "RECOVERY", "SPEED_ENDURANCE", "REST", "SPEED", "STRENGTH", "REST"]
        return ["SPEED", "REST", "SPEED_ENDURANCE", "REST", "SPEED", "REST", "REST"]
    if phase == "COMPETITION":
        if elite:
            return ["SPEED", "REST", "TEMPO", "REST", "SPEED", "REST", "REST"]
        return ["SPEED", "REST", "TEMPO", "REST", "REST", "REST", "REST"]
    if phase == "TRANSITION":
        return ["RECOVERY", "REST", "RECOVERY", "REST", "REST", "REST", "REST"]
    return ["TEMPO", "REST", "STRENGTH", "REST", "TEMPO", "REST", "REST"]


def plan_week(
    week_start: date,
    phase: str,
    category: str,
    week_in_phase: int,
    readiness_score: float,
    acwr: float,
    fatigue_type: str,
    settings: Settings | None = None,
) -> list[PlannedSession]:
    """Adjusted sessions for each training day of the week; rest days are skipped."""
    settings = settings or get_settings()
    planned: list[PlannedSession] = []
    for offset, session_type in enumerate(weekly_structure(phase, category)):
        if session_type == "REST":
            continue
        template = build_session_template(session_type, phase, week_in_phase)
        planned.append(PlannedSession(
            day=week_start + timedelta(days=offset),
            session=adjust_session(template, readiness_score, acwr, fatigue_type, settings),
        ))
    return planned
