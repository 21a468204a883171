"""Shared helpers for the sub-scorers."""

import math
from typing import Iterable, NamedTuple, Optional


class Adjustment(NamedTuple):
    """A named change to a running score.

    ``cap`` clamps the score right after this delta is applied, which is how
    bonuses are limited to 100 one at a time.
    """

    reason: str
    delta: float
    cap: Optional[float] = None


def round_score(value: float) -> int:
    """Round half up, so 72.5 becomes 73 (``round`` would give 72)."""
    return int(math.floor(value + 0.5))


def apply_adjustments(
    start: float,
    adjustments: Iterable[Adjustment],
    floor: Optional[float] = None,
) -> float:
    """Fold adjustments over ``start`` in order, then apply ``floor``."""
    score = start
    for adjustment in adjustments:
        score += adjustment.delta
        if adjustment.cap is not None:
            score = min(score, adjustment.cap)
    if floor is not None:
        score = max(score, floor)
    return score


def bonus(reason: str, points: float, cap: float = 100) -> Adjustment:
    return Adjustment(reason, points, cap)


def penalty(reason: str, points: float) -> Adjustment:
    return Adjustment(reason, -points)
