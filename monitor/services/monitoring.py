"""Athlete monitoring facade.

Fetches records through an injected ``RecordSource`` and runs them through the
pure load, readiness and session engines. Storage is the caller's concern: any
backend that can return ``LoadRecord`` and ``WellnessRecord`` lists will do.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Callable

from monitor.config import Settings, get_settings
from monitor.logging_config import configure_logging, get_logger
from monitor.models import LoadRecord, WellnessRecord
from monitor.services.fatigue import classify_fatigue_type
from monitor.services.readiness import (
    DailyReadiness,
    ReadinessResult,
    assess_readiness,
    readiness_alerts,
    readiness_history,
)
from monitor.services.session_engine import (
    AdjustedSession,
    PlannedSession,
    SessionRecommendation,
    adjust_session,
    build_session_template,
    plan_week,
    recommend_session_type,
)
from monitor.services.workload import (
    AcwrTrendPoint,
    LoadAlert,
    LoadMetrics,
    WeeklyLoadSummary,
    acwr_trend,
    compute_load_metrics,
    load_alerts,
    weekly_load_summary,
)

logger = get_logger(__name__)

# Used when an athlete has no check-in or not enough load history.
DEFAULT_READINESS = 75
DEFAULT_ACWR = 1.0


class RecordSource(ABC):
    """Read-only access to an athlete's load and wellness history."""

    @abstractmethod
    def load_records(self, athlete_id: str, since: date) -> list[LoadRecord]:
        """Load records dated on or after ``since``, in any order."""

    @abstractmethod
    def wellness_records(
        self,
        athlete_id: str,
        since: date | None = None,
        limit: int | None = None,
    ) -> list[WellnessRecord]:
        """Wellness check-ins, newest first, optionally bounded by date and count."""


class InMemoryRecordSource(RecordSource):
    """List-backed record source for scripts, imports and tests."""

    def __init__(self, loads: list[LoadRecord] | None = None, wellness: list[WellnessRecord] | None = None):
        self._loads = list(loads or [])
        self._wellness = list(wellness or [])

    def add_load(self, record: LoadRecord) -> None:
        self._loads.append(record)

    def add_wellness(self, record: WellnessRecord) -> None:
        self._wellness.append(record)

    def load_records(self, athlete_id: str, since: date) -> list[LoadRecord]:
        return [r for r in self._loads if r.athlete_id == athlete_id and r.day >= since]

    def wellness_records(
        self,
        athlete_id: str,
        since: date | None = None,
        limit: int | None = None,
    ) -> list[WellnessRecord]:
        rows = [w for w in self._wellness if w.athlete_id == athlete_id and (since is None or w.log_date >= since)]
        rows.sort(key=lambda w: w.log_date, reverse=True)
        return rows[:limit] if limit is not None else rows


class AthleteMonitor:
    """Per-request entry point combining record access with the scoring engines."""

    def __init__(
        self,
        source: RecordSource,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.clock = clock
        configure_logging(self.settings)

    def _loads_since(self, athlete_id: str, days: int) -> list[LoadRecord]:
        today = self.clock()
        return self.source.load_records(athlete_id, today - timedelta(days=days - 1))

    def _latest_wellness(self, athlete_id: str) -> WellnessRecord | None:
        rows = self.source.wellness_records(athlete_id, limit=1)
        return rows[0] if rows else None

    # -- Load --

    def load_metrics(self, athlete_id: str) -> LoadMetrics | None:
        records = self._loads_since(athlete_id, self.settings.chronic_decay_days)
        metrics = compute_load_metrics(records, today=self.clock(), settings=self.settings)
        if metrics is None:
            logger.info("Insufficient load data for athlete %s", athlete_id, extra={"ctx_athlete_id": athlete_id})
        return metrics

    def acwr_trend(self, athlete_id: str, days: int = 30) -> list[AcwrTrendPoint]:
        records = self._loads_since(athlete_id, days + self.settings.chronic_decay_days)
        return acwr_trend(records, days=days, today=self.clock(), settings=self.settings)

    def weekly_summary(self, athlete_id: str, weeks: int = 8) -> list[WeeklyLoadSummary]:
        records = self._loads_since(athlete_id, weeks * 7)
        return weekly_load_summary(records, weeks=weeks, today=self.clock())

    def load_alerts(self, athlete_id: str) -> list[LoadAlert]:
        alerts = load_alerts(self.load_metrics(athlete_id), self.settings)
        for alert in alerts:
            logger.warning(
                "Load alert %s for athlete %s: %s", alert.alert_type, athlete_id, alert.message,
                extra={"ctx_athlete_id": athlete_id, "ctx_alert_type": alert.alert_type},
            )
        return alerts

    # -- Readiness --

    def readiness(self, athlete_id: str) -> ReadinessResult | None:
        latest = self._latest_wellness(athlete_id)
        if latest is None:
            return None
        return assess_readiness(latest, self.settings)

    def readiness_history(self, athlete_id: str, days: int = 30) -> list[DailyReadiness]:
        since = self.clock() - timedelta(days=days)
        return readiness_history(self.source.wellness_records(athlete_id, since=since), self.settings)

    def readiness_alerts(self, athlete_id: str) -> list[str]:
        return readiness_alerts(self.source.wellness_records(athlete_id, limit=7), self.settings)

    def fatigue_type(self, athlete_id: str) -> str:
        return classify_fatigue_type(self._latest_wellness(athlete_id))

    # -- Sessions --

    def _current_state(self, athlete_id: str) -> tuple[float, float, str]:
        readiness = self.readiness(athlete_id)
        metrics = self.load_metrics(athlete_id)
        score = readiness.score if readiness is not None else DEFAULT_READINESS
        acwr = metrics.acwr if metrics is not None else DEFAULT_ACWR
        return score, acwr, self.fatigue_type(athlete_id)

    def generate_session(
        self,
        athlete_id: str,
        session_type: str,
        phase: str,
        week_in_phase: int = 1,
    ) -> AdjustedSession:
        score, acwr, fatigue = self._current_state(athlete_id)
        template = build_session_template(session_type, phase, week_in_phase)
        session = adjust_session(template, score, acwr, fatigue, self.settings)
        logger.debug(
            "Generated %s session for athlete %s (readiness=%s acwr=%s fatigue=%s)",
            session_type, athlete_id, score, acwr, fatigue,
        )
        return session

    def session_recommendation(self, athlete_id: str) -> SessionRecommendation:
        score, acwr, _ = self._current_state(athlete_id)
        return recommend_session_type(score, acwr, self.settings)

    def plan_week(
        self,
        athlete_id: str,
        week_start: date,
        phase: str,
        category: str,
        week_in_phase: int = 1,
    ) -> list[PlannedSession]:
        score, acwr, fatigue = self._current_state(athlete_id)
        return plan_week(week_start, phase, category, week_in_phase, score, acwr, fatigue, self.settings)
