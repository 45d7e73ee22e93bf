"""
Float helpers for segment bounds.

Segment ends are exclusive but the playhead works with inclusive numeric
bounds, so the end is moved one unit in the last place towards -inf.
"""

import math


def previous_representable(x: float) -> float:
    """
    Return the largest float strictly below ``x``.

    - ``0.0`` and ``-0.0`` map to the smallest negative subnormal.
    - ``-inf`` is already minimal and is returned unchanged.
    - ``nan`` is returned unchanged.
    - ``+inf`` maps to the largest finite float.
    """
    if math.isnan(x) or x == -math.inf:
        return x
    return math.nextafter(x, -math.inf)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high] (low wins when the range is empty)"""
    return max(low, min(value, high))
