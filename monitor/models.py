"""Record shapes consumed by the load and readiness engine.

Both records are produced by the ingestion layer (see ``monitor.validators``)
and are never mutated by the engine.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass


@dataclass(frozen=True)
class LoadRecord:
    """Load from one completed training session."""
    athlete_id: str
    record_date: dt.date | dt.datetime
    daily_load: float | None
    session_rpe: int | None = None      # 1-10
    session_duration: int | None = None  # minutes

    @property
    def day(self) -> dt.date:
        if isinstance(self.record_date, dt.datetime):
            return self.record_date.date()
        return self.record_date


@dataclass(frozen=True)
class WellnessRecord:
    """A daily wellness check-in. Subjective scales run 1-10; absent values are None."""
    athlete_id: str
    log_date: dt.date
    sleep_quality: int | None = None
    energy: int | None = None
    mood: int | None = None
    stress: int | None = None
    muscle_soreness: int | None = None
    motivation: int | None = None
    fatigue: int | None = None
    resting_hr: int | None = None
    hydration_status: int | None = None
    sleep_duration: float | None = None  # hours
