"""Bonus scoring formula."""

from __future__ import annotations

import math


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compute_bonus(base_points: int, multiplier: float) -> int:
    """Extra points a capture earns inside a biome with `multiplier`.

    A multiplier of 1.0 yields no bonus. The result is never negative.
    """
    raw = base_points * (multiplier - 1)
    return max(0, round_half_away_from_zero(raw))
