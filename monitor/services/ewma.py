"""Exponentially weighted moving average over a daily load series.

Reference: Williams et al. (2017), EWMA-based acute:chronic workload ratio.
"""

from __future__ import annotations

from typing import Sequence


def smoothing_factor(decay_days: int) -> float:
    """Lambda = 2 / (N + 1) for an N-day decay constant."""
    return 2.0 / (decay_days + 1)


def ewma(series: Sequence[float], decay_days: int) -> float:
    """Return the final EWMA value of ``series`` (oldest first), seeded with its first value.

    Returns 0.0 for an empty series.
    """
    if not series:
        return 0.0
    lam = smoothing_factor(decay_days)
    value = float(series[0])
    for load in series[1:]:
        value = value + lam * (float(load) - value)
    return value
