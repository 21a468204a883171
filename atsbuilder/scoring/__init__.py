"""ATS compatibility scoring."""

from .aggregate import calculate_ats_score, generate_suggestions, overall_weighted
from .common import Adjustment, apply_adjustments, round_score
from .education import DegreeLevel, classify_degree_levels, score_education
from .experience import LEVEL_BANDS, score_experience
from .keywords import score_keywords
from .parseability import score_format

__all__ = [
    "Adjustment",
    "DegreeLevel",
    "LEVEL_BANDS",
    "apply_adjustments",
    "calculate_ats_score",
    "classify_degree_levels",
    "generate_suggestions",
    "overall_weighted",
    "round_score",
    "score_education",
    "score_experience",
    "score_format",
    "score_keywords",
]
