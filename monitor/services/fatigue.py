from __future__ import annotations

from monitor.models import WellnessRecord

FATIGUE_TYPES = ("neural", "mechanical", "metabolic", "balanced")


def classify_fatigue_type(wellness: WellnessRecord | None) -> str:
    """Coarse fatigue type from self-reported fatigue and soreness (1-10, missing = 0).

    High fatigue with low soreness reads as neural, the reverse as mechanical,
    both elevated as metabolic.
    """
    if wellness is None:
        return "balanced"
    fatigue = wellness.fatigue or 0
    soreness = wellness.muscle_soreness or 0
    if fatigue > 7 and soreness < 5:
        return "neural"
    if soreness > 7 and fatigue < 5:
        return "mechanical"
    if fatigue > 6 and soreness > 6:
        return "metabolic"
    return "balanced"
