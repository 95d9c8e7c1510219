"""Pydantic validation models for records entering the engine.

Field names are resolved once here, including the camelCase and legacy
aliases older clients still send, so the scoring code only ever sees
``LoadRecord`` and ``WellnessRecord``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from monitor.models import LoadRecord, WellnessRecord
from monitor.services.session_engine import SESSION_BASE_DURATION

TRAINING_PHASES = {"GPP", "SPP1", "SPP2", "COMPETITION", "TRANSITION"}


def _scale(*aliases: str):
    """Optional 1-10 subjective scale accepting the given input names."""
    return Field(default=None, ge=1, le=10, validation_alias=AliasChoices(*aliases))


class LoadRecordInput(BaseModel):
    athlete_id: str = Field(min_length=1, validation_alias=AliasChoices("athlete_id", "athleteId"))
    record_date: Union[datetime, date] = Field(validation_alias=AliasChoices("record_date", "recordDate", "date"))
    daily_load: Optional[float] = Field(default=None, ge=0, validation_alias=AliasChoices("daily_load", "dailyLoad"))
    session_rpe: Optional[int] = Field(default=None, ge=1, le=10, validation_alias=AliasChoices("session_rpe", "sessionRPE", "rpe"))
    session_duration: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("session_duration", "sessionDuration", "duration")
    )

    @model_validator(mode="after")
    def derive_srpe_load(self):
        # Foster session-RPE load when the caller only reports RPE and duration
        if self.daily_load is None and self.session_rpe is not None and self.session_duration is not None:
            self.daily_load = float(self.session_rpe * self.session_duration)
        return self

    def to_record(self) -> LoadRecord:
        return LoadRecord(
            athlete_id=self.athlete_id,
            record_date=self.record_date,
            daily_load=self.daily_load,
            session_rpe=self.session_rpe,
            session_duration=self.session_duration,
        )


class WellnessInput(BaseModel):
    athlete_id: str = Field(min_length=1, validation_alias=AliasChoices("athlete_id", "athleteId"))
    log_date: date = Field(validation_alias=AliasChoices("log_date", "logDate", "date"))
    sleep_quality: Optional[int] = _scale("sleep_quality", "sleepQuality")
    energy: Optional[int] = _scale("energy", "energyLevel")
    mood: Optional[int] = _scale("mood", "moodRating")
    stress: Optional[int] = _scale("stress", "stressLevel")
    muscle_soreness: Optional[int] = _scale("muscle_soreness", "muscleSoreness", "sorenessLevel")
    motivation: Optional[int] = _scale("motivation", "motivationLevel")
    fatigue: Optional[int] = _scale("fatigue", "fatigueLevel")
    hydration_status: Optional[int] = _scale("hydration_status", "hydrationStatus", "hydrationLevel")
    resting_hr: Optional[int] = Field(
        default=None, ge=25, le=220, validation_alias=AliasChoices("resting_hr", "restingHR", "restingHeartRate")
    )
    sleep_duration: Optional[float] = Field(
        default=None, ge=0, le=24, validation_alias=AliasChoices("sleep_duration", "sleepDuration", "sleepHours")
    )

    @field_validator("log_date", mode="before")
    @classmethod
    def truncate_datetime(cls, v):
        if isinstance(v, datetime):
            return v.date()
        return v

    def to_record(self) -> WellnessRecord:
        return WellnessRecord(**self.model_dump())


class SessionRequestInput(BaseModel):
    athlete_id: str = Field(min_length=1, validation_alias=AliasChoices("athlete_id", "athleteId"))
    session_type: str = Field(validation_alias=AliasChoices("session_type", "sessionType"))
    phase: str
    week_in_phase: int = Field(default=1, ge=1, le=52, validation_alias=AliasChoices("week_in_phase", "weekInPhase"))

    @field_validator("session_type")
    @classmethod
    def valid_session_type(cls, v):
        allowed = set(SESSION_BASE_DURATION)
        if v not in allowed:
            raise ValueError(f"session_type must be one of {sorted(allowed)}")
        return v

    @field_validator("phase")
    @classmethod
    def valid_phase(cls, v):
        if v not in TRAINING_PHASES:
            raise ValueError(f"phase must be one of {sorted(TRAINING_PHASES)}")
        return v
