"""Half-up rounding for displayed metrics.

Ties go towards positive infinity (12.5 -> 13, -12.5 -> -12), unlike the
built-in ``round`` which sends them to the even neighbour.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    """Half-up rounding to ``digits`` decimal places."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale
