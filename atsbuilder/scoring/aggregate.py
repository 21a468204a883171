"""
ATS score aggregation.

Runs the four sub-scorers over a candidate profile and a job analysis,
combines them with fixed weights and derives improvement suggestions.

Invariant:
Given identical inputs (and the same ``now``), the result is identical.
Nothing is persisted; only process metrics are updated.
"""

from datetime import datetime
from typing import Any, List, Optional, Union

from ..errors import InvalidArgumentError
from ..logger import get_logger
from ..models import ATSScoreResult, CandidateProfile, JobAnalysis, ScoreBreakdown
from ..normalize import build_corpus
from .common import round_score
from .education import EducationScore, score_education
from .experience import ExperienceScore, score_experience
from .keywords import KeywordScore, score_keywords
from .parseability import FormatScore, score_format

WEIGHTS = {
    "keyword_match": 0.4,
    "experience_relevance": 0.3,
    "format_parseability": 0.2,
    "education_match": 0.1,
}

KEYWORD_THRESHOLD = 70
EXPERIENCE_THRESHOLD = 70
FORMAT_THRESHOLD = 80
EDUCATION_THRESHOLD = 70

NO_SUGGESTIONS_MESSAGE = "Your resume looks great! No major improvements needed."


def overall_weighted(keyword: int, experience: int, format_: int, education: int) -> int:
    """Weighted sum of the four sub-scores, rounded half up."""
    return round_score(
        keyword * WEIGHTS["keyword_match"]
        + experience * WEIGHTS["experience_relevance"]
        + format_ * WEIGHTS["format_parseability"]
        + education * WEIGHTS["education_match"]
    )


def generate_suggestions(
    keyword: KeywordScore,
    experience: ExperienceScore,
    format_: FormatScore,
    education: EducationScore,
) -> List[str]:
    """Suggestions in fixed order; a single positive message when none apply."""
    suggestions: List[str] = []

    if keyword.score < KEYWORD_THRESHOLD:
        suggestions.append(
            f"Incorporate more job-specific keywords. Missing: {', '.join(keyword.missing[:5])}"
        )
    if experience.score < EXPERIENCE_THRESHOLD:
        suggestions.append("Highlight more relevant work experience that aligns with the job requirements")
    if format_.score < FORMAT_THRESHOLD:
        suggestions.append("Improve resume structure by adding more detailed achievements and bullet points")
    if education.score < EDUCATION_THRESHOLD:
        suggestions.append("Ensure your education section clearly lists relevant degrees and achievements")
    if keyword.missing:
        suggestions.append(
            "Consider adding these skills if you have them: " + ", ".join(keyword.missing[:3])
        )

    return suggestions or [NO_SUGGESTIONS_MESSAGE]


def coerce_profile(profile: Union[CandidateProfile, dict, None]) -> CandidateProfile:
    if profile is None:
        raise InvalidArgumentError("Candidate profile is required")
    if isinstance(profile, CandidateProfile):
        return profile
    if isinstance(profile, dict):
        return CandidateProfile.from_dict(profile)
    raise InvalidArgumentError(f"Unsupported candidate profile type: {type(profile).__name__}")


def coerce_job_analysis(job_analysis: Union[JobAnalysis, dict, None]) -> JobAnalysis:
    if job_analysis is None:
        raise InvalidArgumentError("Job analysis is required")
    if isinstance(job_analysis, JobAnalysis):
        return job_analysis
    if isinstance(job_analysis, dict):
        return JobAnalysis.from_dict(job_analysis)
    raise InvalidArgumentError(f"Unsupported job analysis type: {type(job_analysis).__name__}")


def calculate_ats_score(
    profile: Union[CandidateProfile, dict, Any],
    job_analysis: Union[JobAnalysis, dict, Any],
    now: Optional[datetime] = None,
    match_mode: Optional[str] = None,
) -> ATSScoreResult:
    """
    Calculate the ATS compatibility score of a profile for a job.

    Args:
        profile: CandidateProfile or its camelCase dict form
        job_analysis: JobAnalysis or its camelCase dict form
        now: Reference time for tenure and recency (default: utcnow)
        match_mode: Keyword matching mode, "substring" (default) or "word"

    Returns:
        ATSScoreResult with overall score, breakdown, missing keywords and suggestions

    Raises:
        InvalidArgumentError: If either input is missing or malformed
    """
    logger = get_logger()
    try:
        profile = coerce_profile(profile)
        job_analysis = coerce_job_analysis(job_analysis)
        keyword = score_keywords(
            build_corpus(profile),
            job_analysis.skills,
            job_analysis.keywords,
            mode=match_mode or "substring",
        )
    except InvalidArgumentError as e:
        logger.record_score_failure(type(e).__name__)
        logger.warning("Rejected ATS score request", error=str(e))
        raise

    experience = score_experience(profile.experience, job_analysis.experience_level, now=now)
    format_ = score_format(profile)
    education = score_education(profile.education, job_analysis.requirements)

    overall = overall_weighted(keyword.score, experience.score, format_.score, education.score)
    result = ATSScoreResult(
        overall=overall,
        breakdown=ScoreBreakdown(
            keyword_match=keyword.score,
            experience_relevance=experience.score,
            format_parseability=format_.score,
            education_match=education.score,
        ),
        missing_keywords=list(keyword.missing),
        suggestions=generate_suggestions(keyword, experience, format_, education),
    )

    logger.record_score(overall)
    logger.debug(
        "Calculated ATS score",
        company=job_analysis.company,
        position=job_analysis.position,
        overall=overall,
        keywords_matched=f"{keyword.matched}/{keyword.total}",
        total_years=round(experience.total_years, 1),
    )
    return result
