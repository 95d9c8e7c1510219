"""Tests for ACWR, monotony, strain, and load alerts."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from monitor.config import Settings
from monitor.models import LoadRecord
from monitor.services.workload import (
    RISK_LEVELS,
    LoadMetrics,
    acwr_trend,
    calculate_monotony,
    calculate_strain,
    classify_acwr_risk,
    compute_load_metrics,
    load_alerts,
    optimal_load_range,
    weekly_load_summary,
)

TODAY = date(2026, 3, 1)
SETTINGS = Settings()


def _daily(loads: list[float], rpe: int | None = None) -> list[LoadRecord]:
    """One record per day, the last load landing on TODAY."""
    n = len(loads)
    return [
        LoadRecord(athlete_id="a1", record_date=TODAY - timedelta(days=n - 1 - i), daily_load=load, session_rpe=rpe)
        for i, load in enumerate(loads)
    ]


def _metrics(acwr: float, monotony: float = 1.0) -> LoadMetrics:
    return LoadMetrics(
        acwr=acwr, acute_load=100, chronic_load=100, monotony=monotony,
        strain=700, risk_level="OPTIMAL", recommendation="",
    )


# --- Monotony / strain ---

def test_monotony_flat_week_sentinel():
    assert calculate_monotony([100.0] * 7) == 10.0


def test_monotony_rest_week_sentinel():
    assert calculate_monotony([0.0] * 7) == 10.0


def test_monotony_varied_week():
    # mean 285.7, population sd 216.7
    assert calculate_monotony([500.0, 200.0, 0.0, 400.0, 0.0, 300.0, 600.0]) == pytest.approx(1.32, abs=0.01)


def test_monotony_empty():
    assert calculate_monotony([]) == 0.0


def test_strain():
    assert calculate_strain([100.0] * 7, 10.0) == 7000.0


# --- Risk bands ---

def test_risk_bands_exclusive_lower_bounds():
    assert classify_acwr_risk(1.51, SETTINGS)[0] == "VERY_HIGH"
    assert classify_acwr_risk(1.5, SETTINGS)[0] == "HIGH"
    assert classify_acwr_risk(1.31, SETTINGS)[0] == "HIGH"
    assert classify_acwr_risk(1.3, SETTINGS)[0] == "OPTIMAL"
    assert classify_acwr_risk(0.81, SETTINGS)[0] == "OPTIMAL"
    assert classify_acwr_risk(0.8, SETTINGS)[0] == "LOW"
    assert classify_acwr_risk(0.0, SETTINGS)[0] == "LOW"


def test_risk_recommendations():
    assert classify_acwr_risk(2.0, SETTINGS)[1] == "Immediate load reduction required"
    assert classify_acwr_risk(1.4, SETTINGS)[1] == "Consider reducing training load"
    assert classify_acwr_risk(1.0, SETTINGS)[1] == "Optimal training zone"
    assert classify_acwr_risk(0.5, SETTINGS)[1] == "Consider gradually increasing load"


def test_risk_bands_follow_settings():
    strict = Settings(acwr_high=1.2)
    assert classify_acwr_risk(1.25, strict)[0] == "HIGH"


# --- Load metrics ---

def test_insufficient_data_returns_none():
    assert compute_load_metrics(_daily([100.0] * 6), today=TODAY, settings=SETTINGS) is None


def test_records_outside_window_do_not_count():
    records = _daily([100.0] * 3) + [
        LoadRecord(athlete_id="a1", record_date=TODAY - timedelta(days=40 + i), daily_load=100) for i in range(10)
    ]
    assert compute_load_metrics(records, today=TODAY, settings=SETTINGS) is None


def test_new_athlete_zero_padded_chronic_inflates_acwr():
    metrics = compute_load_metrics(_daily([100.0] * 7), today=TODAY, settings=SETTINGS)
    assert metrics is not None
    assert metrics.acute_load == 100
    # 21 empty days drag the chronic EWMA down to ~39
    assert metrics.chronic_load == 39
    assert metrics.acwr == pytest.approx(2.54, abs=0.01)
    assert metrics.risk_level == "VERY_HIGH"
    assert metrics.monotony == 10.0
    assert metrics.strain == 7000


def test_history_policy_uses_actual_history_length():
    settings = Settings(chronic_window_policy="history")
    metrics = compute_load_metrics(_daily([100.0] * 7), today=TODAY, settings=settings)
    assert metrics.chronic_load == 100
    assert metrics.acwr == 1.0
    assert metrics.risk_level == "OPTIMAL"


def test_steady_load_is_optimal():
    metrics = compute_load_metrics(_daily([50.0] * 28), today=TODAY, settings=SETTINGS)
    assert metrics.acwr == 1.0
    assert metrics.risk_level == "OPTIMAL"
    assert metrics.recommendation == "Optimal training zone"


def test_zero_chronic_load_guard():
    metrics = compute_load_metrics(_daily([0.0] * 7), today=TODAY, settings=SETTINGS)
    assert metrics.acwr == 0.0
    assert metrics.chronic_load == 0
    assert metrics.risk_level == "LOW"


def test_deload_week_is_low_risk():
    metrics = compute_load_metrics(_daily([300.0] * 21 + [20.0] * 7), today=TODAY, settings=SETTINGS)
    assert metrics.acwr < 0.8
    assert metrics.risk_level == "LOW"


def test_risk_levels_ordered_by_severity():
    assert RISK_LEVELS.index("VERY_HIGH") > RISK_LEVELS.index("HIGH") > RISK_LEVELS.index("OPTIMAL")
    assert RISK_LEVELS.index("OPTIMAL") > RISK_LEVELS.index("LOW")


# --- ACWR trend ---

def test_acwr_trend_steady_load():
    trend = acwr_trend(_daily([50.0] * 58), days=30, today=TODAY, settings=SETTINGS)
    assert len(trend) == 31
    assert trend[-1].day == TODAY
    assert trend[0].day == TODAY - timedelta(days=30)
    assert all(p.acwr == 1.0 for p in trend)


def test_acwr_trend_needs_28_records():
    assert acwr_trend(_daily([50.0] * 27), days=30, today=TODAY, settings=SETTINGS) == []


# --- Weekly summary ---

def test_weekly_load_summary():
    records = [
        LoadRecord(athlete_id="a1", record_date=TODAY, daily_load=100, session_rpe=6),
        LoadRecord(athlete_id="a1", record_date=TODAY - timedelta(days=1), daily_load=200, session_rpe=8),
        LoadRecord(athlete_id="a1", record_date=TODAY - timedelta(days=7), daily_load=150, session_rpe=5),
    ]
    weeks = weekly_load_summary(records, weeks=2, today=TODAY)
    assert [w.week_number for w in weeks] == [1, 2]
    assert weeks[0].total_load == 150
    assert weeks[0].session_count == 1
    assert weeks[0].load_change_pct == 0
    assert weeks[1].total_load == 300
    assert weeks[1].session_count == 2
    assert weeks[1].avg_session_load == 150.0
    assert weeks[1].avg_rpe == 7.0
    assert weeks[1].load_change_pct == 100


def test_weekly_change_pct_rounds_half_up():
    records = [
        LoadRecord(athlete_id="a1", record_date=TODAY - timedelta(days=7), daily_load=800),
        LoadRecord(athlete_id="a1", record_date=TODAY, daily_load=900),
    ]
    weeks = weekly_load_summary(records, weeks=2, today=TODAY)
    # 100 / 800 = 12.5%
    assert weeks[1].load_change_pct == 13


def test_weekly_summary_malformed_loads_count_as_zero():
    records = [
        LoadRecord(athlete_id="a1", record_date=TODAY, daily_load=float("nan")),
        LoadRecord(athlete_id="a1", record_date=TODAY, daily_load="abc"),
        LoadRecord(athlete_id="a1", record_date=TODAY, daily_load=120),
    ]
    week = weekly_load_summary(records, weeks=1, today=TODAY)[0]
    assert week.total_load == 120.0
    assert week.session_count == 3
    assert week.avg_session_load == 40.0


def test_weekly_load_summary_empty_weeks():
    weeks = weekly_load_summary([], weeks=4, today=TODAY)
    assert len(weeks) == 4
    assert all(w.total_load == 0 and w.avg_rpe == 0.0 for w in weeks)


# --- Alerts ---

def test_alerts_none_without_metrics():
    assert load_alerts(None, SETTINGS) == []


def test_alerts_critical_and_monotony():
    alerts = load_alerts(_metrics(1.6, monotony=2.5), SETTINGS)
    assert [a.alert_type for a in alerts] == ["ACWR_CRITICAL", "MONOTONY"]
    assert alerts[0].severity == "HIGH"
    assert "1.60" in alerts[0].message


def test_alerts_high():
    alerts = load_alerts(_metrics(1.4), SETTINGS)
    assert [(a.alert_type, a.severity) for a in alerts] == [("ACWR_HIGH", "MEDIUM")]


def test_no_alerts_in_optimal_zone():
    assert load_alerts(_metrics(1.1, monotony=1.2), SETTINGS) == []


def test_optimal_load_range():
    rng = optimal_load_range(100, SETTINGS)
    assert rng.min_load == 560
    assert rng.max_load == 910
    assert rng.target_load == 700
    assert "700 AU" in rng.message
