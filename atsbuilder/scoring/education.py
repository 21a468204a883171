"""
Education match scoring (10% of the overall ATS score).

Degree levels are resolved once per string by ``classify_degree_levels``
and compared as sets: the levels the job asks for against the levels the
candidate holds.
"""

import enum
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set

from ..schema import MAX_GPA
from .common import Adjustment, apply_adjustments, bonus, round_score

NO_EDUCATION_SCORE = 50
BASE_SCORE = 70
GOOD_GPA = 3.5


class DegreeLevel(enum.Enum):
    NONE = "none"
    BACHELOR = "bachelor"
    MASTER = "master"
    DOCTORATE = "doctorate"


DEGREE_MARKERS = {
    DegreeLevel.BACHELOR: ("bachelor",),
    DegreeLevel.MASTER: ("master",),
    DegreeLevel.DOCTORATE: ("phd", "doctorate"),
}

# Level both required and held -> score; first hit wins
MATCH_SCORES = [
    (DegreeLevel.DOCTORATE, 100),
    (DegreeLevel.MASTER, 95),
    (DegreeLevel.BACHELOR, 90),
]
BACHELOR_HELD_SCORE = 85


@dataclass
class EducationScore:
    score: int
    required_levels: Set[DegreeLevel] = field(default_factory=set)
    held_levels: Set[DegreeLevel] = field(default_factory=set)
    adjustments: List[Adjustment] = field(default_factory=list)


def classify_degree_levels(text: str) -> Set[DegreeLevel]:
    """Every degree level mentioned in ``text``; {NONE} when there is none.

    Substring checks are independent, so "Master's after a Bachelor's"
    yields both levels.
    """
    lowered = (text or "").lower()
    levels = {
        level for level, markers in DEGREE_MARKERS.items()
        if any(marker in lowered for marker in markers)
    }
    return levels or {DegreeLevel.NONE}


def levels_across(texts: Iterable[str]) -> Set[DegreeLevel]:
    levels: Set[DegreeLevel] = set()
    for text in texts:
        levels |= classify_degree_levels(text)
    levels.discard(DegreeLevel.NONE)
    return levels


def _is_good_gpa(gpa) -> bool:
    if isinstance(gpa, bool) or not isinstance(gpa, (int, float)):
        return False
    return GOOD_GPA <= gpa <= MAX_GPA


def score_education(education: Sequence, requirements: Sequence) -> EducationScore:
    """
    Score the candidate's degrees against degree levels named in the job.

    Args:
        education: Candidate education entries
        requirements: Job requirements; all texts are searched regardless of type

    Returns:
        EducationScore; 50 when the candidate lists no education at all
    """
    if not education:
        return EducationScore(score=NO_EDUCATION_SCORE)

    requirement_text = " ".join((r.text or "").lower() for r in requirements)
    required = levels_across([requirement_text])
    held = levels_across(edu.degree or "" for edu in education)

    base = BASE_SCORE
    for level, level_score in MATCH_SCORES:
        if level in required and level in held:
            base = level_score
            break
    else:
        if DegreeLevel.BACHELOR in held:
            base = BACHELOR_HELD_SCORE

    adjustments: List[Adjustment] = []
    if any(_is_good_gpa(edu.gpa) for edu in education):
        adjustments.append(bonus("GPA 3.5 or higher", 5))
    if any(edu.achievements for edu in education):
        adjustments.append(bonus("academic achievements", 5))

    score = apply_adjustments(base, adjustments)
    return EducationScore(
        score=round_score(score),
        required_levels=required,
        held_levels=held,
        adjustments=adjustments,
    )
