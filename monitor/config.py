"""Engine configuration with environment-specific profiles.

Supports dev, staging, and production environments via APP_ENV.
All thresholds can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Weights sum to 1.0 when every field is present; stress and soreness are inverted.
READINESS_WEIGHTS: dict[str, float] = {
    "sleep_quality": 0.25,
    "energy": 0.20,
    "mood": 0.15,
    "stress": 0.15,
    "muscle_soreness": 0.10,
    "motivation": 0.15,
}

CHRONIC_WINDOW_POLICIES = ("padded", "history")


@dataclass(frozen=True)
class Settings:
    """Immutable engine settings resolved from environment."""

    app_env: str = "dev"
    log_level: str = "INFO"

    # EWMA horizons
    acute_decay_days: int = 7
    chronic_decay_days: int = 28

    # ACWR risk bands
    acwr_low: float = 0.8
    acwr_high: float = 1.3
    acwr_very_high: float = 1.5
    monotony_alert_threshold: float = 2.0

    min_load_records: int = 7
    chronic_window_policy: str = "padded"
    readiness_weights: dict[str, float] = field(default_factory=lambda: dict(READINESS_WEIGHTS))


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
    },
    "staging": {
        "log_level": "INFO",
    },
    "production": {
        "log_level": "WARNING",
    },
}


def get_chronic_window_policy() -> str:
    policy = os.getenv("CHRONIC_WINDOW_POLICY", "padded").strip().lower()
    if policy not in CHRONIC_WINDOW_POLICIES:
        raise ValueError(f"CHRONIC_WINDOW_POLICY must be one of {CHRONIC_WINDOW_POLICIES}, got {policy!r}")
    return policy


def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        acute_decay_days=int(os.getenv("ACUTE_DECAY_DAYS", "7")),
        chronic_decay_days=int(os.getenv("CHRONIC_DECAY_DAYS", "28")),
        acwr_low=float(os.getenv("ACWR_LOW", "0.8")),
        acwr_high=float(os.getenv("ACWR_HIGH", "1.3")),
        acwr_very_high=float(os.getenv("ACWR_VERY_HIGH", "1.5")),
        monotony_alert_threshold=float(os.getenv("MONOTONY_ALERT_THRESHOLD", "2.0")),
        min_load_records=int(os.getenv("MIN_LOAD_RECORDS", "7")),
        chronic_window_policy=get_chronic_window_policy(),
    )
