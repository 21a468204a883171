"""
Heuristic job description analysis and profile-to-job matching.

``basic_analysis`` extracts a JobAnalysis from raw job text without any
language model. ``match_profile_to_job`` gives a quick fit estimate that is
independent of the ATS score (different weights, no format checks).
"""

from dataclasses import dataclass, field
from typing import List

from .logger import get_logger
from .models import CandidateProfile, JobAnalysis
from .normalize import join_lower
from .scoring.common import round_score

COMMON_SKILLS = [
    "javascript", "typescript", "python", "java", "react", "node", "sql",
    "aws", "docker", "kubernetes", "git", "agile", "rest", "api",
]
ENTRY_MARKERS = ("entry", "junior", "0-2 years")
SENIOR_MARKERS = ("senior", "5+ years", "lead")
DEFAULT_LEVEL = "mid"


def detect_experience_level(text: str) -> str:
    lowered = text.lower()
    if any(marker in lowered for marker in ENTRY_MARKERS):
        return "entry"
    if any(marker in lowered for marker in SENIOR_MARKERS):
        return "senior"
    return DEFAULT_LEVEL


def basic_analysis(raw_text: str, company: str = "", position: str = "") -> JobAnalysis:
    """
    Extract a minimal JobAnalysis from raw job description text.

    Args:
        raw_text: Job description as plain text
        company: Company name to carry on the analysis
        position: Position title to carry on the analysis

    Returns:
        JobAnalysis with common skills found in the text (also used as
        keywords) and no parsed requirements
    """
    lowered = (raw_text or "").lower()
    skills = [skill for skill in COMMON_SKILLS if skill in lowered]
    level = detect_experience_level(lowered)
    get_logger().info(
        "Analyzed job description",
        company=company,
        position=position,
        skills_found=len(skills),
        experience_level=level,
    )
    return JobAnalysis(
        company=company,
        position=position,
        requirements=[],
        skills=skills,
        keywords=list(skills),
        experience_level=level,
    )


@dataclass
class SkillMatch:
    percentage: int
    matching_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)


@dataclass
class ExperienceMatch:
    score: int
    relevant_experiences: List[str] = field(default_factory=list)


@dataclass
class EducationMatch:
    score: int
    meets_requirements: bool


@dataclass
class MatchResult:
    skill_match: SkillMatch
    experience_relevance: ExperienceMatch
    education_match: EducationMatch
    overall_score: int
    recommendations: List[str] = field(default_factory=list)


def calculate_skill_match(profile: CandidateProfile, required_skills: List[str]) -> SkillMatch:
    if not required_skills:
        return SkillMatch(percentage=100)

    user_skills = [s.name.strip().lower() for s in profile.skills if (s.name or "").strip()]
    result = SkillMatch(percentage=0)
    for required in required_skills:
        wanted = required.lower()
        if any(wanted in have or have in wanted for have in user_skills):
            result.matching_skills.append(required)
        else:
            result.missing_skills.append(required)

    result.percentage = round_score(len(result.matching_skills) / len(required_skills) * 100)
    return result


def calculate_experience_match(profile: CandidateProfile, keywords: List[str]) -> ExperienceMatch:
    if not profile.experience:
        return ExperienceMatch(score=0)

    result = ExperienceMatch(score=0)
    total = 0.0
    for exp in profile.experience:
        text = join_lower([
            exp.position, exp.description,
            " ".join(exp.achievements), " ".join(exp.technologies),
        ])
        hits = sum(1 for keyword in keywords if keyword.lower() in text)
        if hits:
            result.relevant_experiences.append(f"{exp.position} at {exp.company}")
            total += min(hits / len(keywords), 1) * 100

    result.score = min(round_score(total / len(profile.experience)), 100)
    return result


def calculate_education_match(profile: CandidateProfile, job_analysis: JobAnalysis) -> EducationMatch:
    if not profile.education:
        return EducationMatch(score=0, meets_requirements=False)

    education_reqs = [r for r in job_analysis.requirements if r.type == "education"]
    if not education_reqs:
        return EducationMatch(score=100, meets_requirements=True)

    has_degree = any(edu.degree for edu in profile.education)
    matched = False
    for req in education_reqs:
        req_text = (req.text or "").lower()
        for edu in profile.education:
            edu_text = join_lower([edu.degree, edu.field_of_study])
            if any(level in req_text and level in edu_text for level in ("bachelor", "master", "phd")):
                matched = True

    score = 100 if matched else (70 if has_degree else 0)
    return EducationMatch(score=score, meets_requirements=matched or has_degree)


def generate_recommendations(
    skill: SkillMatch,
    experience: ExperienceMatch,
    education: EducationMatch,
) -> List[str]:
    recommendations = []
    if skill.percentage < 70:
        recommendations.append(
            f"Consider adding these skills to your profile: {', '.join(skill.missing_skills[:3])}"
        )
    if experience.score < 60:
        recommendations.append("Highlight more relevant experience that matches the job requirements")
    if not education.meets_requirements:
        recommendations.append(
            "Consider adding relevant certifications or education to strengthen your profile"
        )
    if skill.percentage >= 80 and experience.score >= 70:
        recommendations.append(
            "Your profile is a strong match! Focus on tailoring your resume to highlight "
            "matching skills and experience."
        )
    return recommendations


def match_profile_to_job(profile: CandidateProfile, job_analysis: JobAnalysis) -> MatchResult:
    """
    Estimate how well a full profile fits a job before generating a resume.

    Overall score weights skills 40%, experience 40% and education 20%.
    """
    skill = calculate_skill_match(profile, job_analysis.skills)
    experience = calculate_experience_match(profile, job_analysis.keywords)
    education = calculate_education_match(profile, job_analysis)

    overall = round_score(skill.percentage * 0.4 + experience.score * 0.4 + education.score * 0.2)
    return MatchResult(
        skill_match=skill,
        experience_relevance=experience,
        education_match=education,
        overall_score=overall,
        recommendations=generate_recommendations(skill, experience, education),
    )
