"""
Experience relevance scoring (30% of the overall ATS score).

Total tenure is mapped against the seniority band of the target role,
then bonuses are applied for breadth (3+ roles) and recency.

Callers must pass experience ordered most recent first: recency is judged
from the first entry only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, NamedTuple, Optional, Sequence

from ..dates import months_between, resolve_now
from .common import Adjustment, apply_adjustments, bonus, round_score


class LevelBand(NamedTuple):
    min_years: float
    max_years: float
    base_score: int


LEVEL_BANDS: Dict[str, LevelBand] = {
    "entry": LevelBand(0, 2, 80),
    "junior": LevelBand(1, 3, 80),
    "mid": LevelBand(2, 5, 85),
    "senior": LevelBand(5, 10, 90),
    "lead": LevelBand(7, 15, 90),
    "principal": LevelBand(10, 20, 95),
}

UNKNOWN_LEVEL_WITH_EXPERIENCE = 75
UNKNOWN_LEVEL_WITHOUT_EXPERIENCE = 50
MANY_ROLES = 3
RECENT_MONTHS = 6


@dataclass
class ExperienceScore:
    score: int
    total_years: float
    adjustments: List[Adjustment] = field(default_factory=list)


def total_experience_months(experience: Sequence, now: datetime) -> float:
    """Sum of role durations in 30-day months. Overlapping roles are not merged."""
    total = 0.0
    for exp in experience:
        if exp.start_date is None:
            continue
        end = exp.end_date or now
        total += months_between(exp.start_date, end)
    return total


def band_score(total_years: float, target_level: Optional[str]) -> int:
    band = LEVEL_BANDS.get((target_level or "").lower())
    if band is None:
        return UNKNOWN_LEVEL_WITH_EXPERIENCE if total_years > 0 else UNKNOWN_LEVEL_WITHOUT_EXPERIENCE
    if band.min_years <= total_years <= band.max_years:
        return band.base_score
    if total_years > band.max_years:
        # overqualified
        return max(band.base_score - 5, 70)
    return max(band.base_score - 20, 50)


def score_experience(
    experience: Sequence,
    target_level: Optional[str],
    now: Optional[datetime] = None,
) -> ExperienceScore:
    """
    Score how well total tenure fits the target seniority level.

    Args:
        experience: Work experience entries, most recent first
        target_level: entry, junior, mid, senior, lead or principal
        now: Reference time for ongoing roles and recency (default: utcnow)

    Returns:
        ExperienceScore with the unrounded total years of experience
    """
    now = resolve_now(now)
    total_years = total_experience_months(experience, now) / 12

    adjustments: List[Adjustment] = []
    if len(experience) >= MANY_ROLES:
        adjustments.append(bonus("three or more roles", 10))

    # An empty list counts as current, like an ongoing role
    most_recent_end = (experience[0].end_date if experience else None) or now
    if months_between(most_recent_end, now) < RECENT_MONTHS:
        adjustments.append(bonus("recent experience", 5))

    score = apply_adjustments(band_score(total_years, target_level), adjustments)
    return ExperienceScore(score=round_score(score), total_years=total_years, adjustments=adjustments)
