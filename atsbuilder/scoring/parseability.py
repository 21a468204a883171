"""Format parseability scoring (20% of the overall ATS score)."""

from dataclasses import dataclass, field
from typing import List

from .common import Adjustment, apply_adjustments, bonus, penalty, round_score

MIN_SUMMARY_LENGTH = 50


@dataclass
class FormatScore:
    score: int
    adjustments: List[Adjustment] = field(default_factory=list)


def format_adjustments(profile) -> List[Adjustment]:
    """Section checks in evaluation order: penalties first, then capped bonuses."""
    adjustments: List[Adjustment] = []

    if not profile.summary or len(profile.summary) < MIN_SUMMARY_LENGTH:
        adjustments.append(penalty("summary missing or too short", 10))
    if not profile.experience:
        adjustments.append(penalty("no work experience", 20))
    if not profile.skills:
        adjustments.append(penalty("no skills", 15))
    if not profile.education:
        adjustments.append(penalty("no education", 10))

    for i, exp in enumerate(profile.experience):
        if not exp.achievements:
            adjustments.append(penalty(f"experience[{i}] has no achievements", 5))
        if not exp.position or not exp.company:
            adjustments.append(penalty(f"experience[{i}] missing position or company", 5))

    if profile.projects:
        adjustments.append(bonus("has projects", 5))
    info = profile.personal_info
    if info.email and info.phone:
        adjustments.append(bonus("email and phone present", 5))

    return adjustments


def score_format(profile) -> FormatScore:
    adjustments = format_adjustments(profile)
    score = apply_adjustments(100, adjustments, floor=0)
    return FormatScore(score=round_score(score), adjustments=adjustments)
