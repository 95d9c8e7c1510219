"""Tabular views of load history for dashboard charts."""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

import pandas as pd

from monitor.config import Settings, get_settings
from monitor.models import LoadRecord
from monitor.services.load_series import coerce_load
from monitor.services.rounding import round_to
from monitor.services.workload import AcwrTrendPoint

WEEKLY_COLUMNS = ["week", "total_load", "sessions", "avg_rpe"]
TREND_COLUMNS = ["day", "acwr", "acute_load", "chronic_load"]


def weekly_load_frame(records: Iterable[LoadRecord]) -> pd.DataFrame:
    """Aggregate load records into calendar-week totals.

    Returns a DataFrame with columns: week, total_load, sessions, avg_rpe.
    """
    rows = [
        {"date": r.day, "daily_load": coerce_load(r.daily_load), "session_rpe": r.session_rpe}
        for r in records
    ]
    if not rows:
        return pd.DataFrame(columns=WEEKLY_COLUMNS)
    d = pd.DataFrame(rows)
    d["date"] = pd.to_datetime(d["date"])
    d["session_rpe"] = pd.to_numeric(d["session_rpe"], errors="coerce")
    d["week"] = d["date"].dt.to_period("W").astype(str)
    out = d.groupby("week", as_index=False).agg(
        total_load=("daily_load", "sum"),
        sessions=("daily_load", "count"),
        avg_rpe=("session_rpe", "mean"),
    )
    out["avg_rpe"] = out["avg_rpe"].map(lambda v: v if pd.isna(v) else round_to(v, 1))
    return out


def acwr_trend_frame(points: list[AcwrTrendPoint], settings: Settings | None = None) -> pd.DataFrame:
    """One row per day of an ACWR trend, flagging days inside the optimal band for chart shading."""
    settings = settings or get_settings()
    if not points:
        return pd.DataFrame(columns=TREND_COLUMNS + ["in_optimal_zone"])
    df = pd.DataFrame([asdict(p) for p in points], columns=TREND_COLUMNS)
    df["day"] = pd.to_datetime(df["day"])
    df["in_optimal_zone"] = (df["acwr"] > settings.acwr_low) & (df["acwr"] <= settings.acwr_high)
    return df
