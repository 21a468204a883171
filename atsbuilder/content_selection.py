"""
Content selection for tailored resumes.

Scores every experience, skill and project of a profile against the
keywords of a job analysis, consolidates roles held at the same company
and keeps the most relevant items:

- top 5 experiences
- top 20 skills
- top 3 projects
- all education

Selection is deterministic for a fixed ``now``; ties keep profile order.
"""

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .dates import months_between, resolve_now
from .models import (
    CandidateProfile,
    EducationEntry,
    JobAnalysis,
    PersonalInfo,
    ProjectEntry,
    SkillEntry,
    WorkExperience,
)
from .normalize import join_lower, normalize_company_name

MAX_EXPERIENCES = 5
MAX_SKILLS = 20
MAX_PROJECTS = 3
MERGED_ACHIEVEMENTS = 5
PROGRESSION_ACHIEVEMENTS = 6
MIN_REQUIREMENT_WORD = 4

STRONG_VERBS = [
    "developed", "implemented", "designed", "led", "managed", "created",
    "improved", "increased", "reduced", "optimized", "automated", "built",
    "architected", "launched", "delivered", "achieved", "spearheaded",
]
IMPACT_WORDS = ["revenue", "efficiency", "performance", "scalability", "quality", "time", "cost"]
PROFICIENCY_BONUS = {"expert": 4, "advanced": 3, "intermediate": 2, "beginner": 1}


@dataclass
class SelectedExperience(WorkExperience):
    relevance_score: float = 0


@dataclass
class SelectedSkill(SkillEntry):
    relevance_score: float = 0


@dataclass
class SelectedProject(ProjectEntry):
    relevance_score: float = 0


@dataclass
class SelectedContent:
    personal_info: PersonalInfo
    summary: str
    experience: List[SelectedExperience] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    skills: List[SelectedSkill] = field(default_factory=list)
    projects: List[SelectedProject] = field(default_factory=list)

    def to_profile(self) -> CandidateProfile:
        """The selection as a profile, ready for ``calculate_ats_score``."""
        return CandidateProfile(
            personal_info=self.personal_info,
            summary=self.summary,
            experience=list(self.experience),
            education=list(self.education),
            skills=list(self.skills),
            projects=list(self.projects),
        )


def _scored(cls, item, score: float):
    values = {f.name: getattr(item, f.name) for f in fields(item)}
    values.pop("relevance_score", None)
    return cls(**values, relevance_score=score)


def collect_job_keywords(job_analysis: JobAnalysis) -> List[str]:
    """Lower-cased job skills, keywords and long requirement words, de-duplicated."""
    keywords: Dict[str, None] = {}
    for skill in job_analysis.skills:
        keywords[skill.lower()] = None
    for keyword in job_analysis.keywords:
        keywords[keyword.lower()] = None
    for req in job_analysis.requirements:
        for word in (req.text or "").lower().split():
            if len(word) >= MIN_REQUIREMENT_WORD:
                keywords[word] = None
    return list(keywords)


def _keyword_hits(text: str, keywords: Iterable[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def experience_relevance(exp: WorkExperience, keywords: List[str], now: datetime) -> float:
    text = join_lower([
        exp.position, exp.company, exp.description,
        " ".join(exp.achievements), " ".join(exp.technologies),
    ])
    score = 2 * _keyword_hits(text, keywords)

    end = exp.end_date or now
    months_ago = months_between(end, now)
    if months_ago < 12:
        score += 5
    elif months_ago < 36:
        score += 3

    if exp.start_date is not None:
        duration = months_between(exp.start_date, end)
        if duration > 24:
            score += 3
        elif duration > 12:
            score += 2

    return score


def skill_relevance(skill: SkillEntry, keywords: List[str]) -> float:
    name = (skill.name or "").strip().lower()
    score: float = 0
    if name:
        if name in keywords:
            score += 10
        for keyword in keywords:
            if name in keyword or keyword in name:
                score += 5
    # "Expert" and "expert" earn the same bonus
    score += PROFICIENCY_BONUS.get((skill.proficiency or "").lower(), 0)
    if skill.years_of_experience:
        score += min(skill.years_of_experience, 5)
    return score


def project_relevance(project: ProjectEntry, keywords: List[str], now: datetime) -> float:
    text = join_lower([
        project.title, project.description,
        " ".join(project.technologies), " ".join(project.highlights),
    ])
    score = 2 * _keyword_hits(text, keywords)

    months_ago = months_between(project.end_date or now, now)
    if months_ago < 12:
        score += 3
    elif months_ago < 24:
        score += 2

    if project.url or project.github_url:
        score += 2
    return score


def score_achievement(achievement: str) -> int:
    """Quality of a bullet point: metrics, strong opening verb, length, impact."""
    score = 0
    lowered = achievement.lower()

    if re.search(r"\d", achievement):
        score += 10
        if "%" in achievement:
            score += 5
    if any(lowered.startswith(verb) for verb in STRONG_VERBS):
        score += 8
    if 8 <= len(achievement.split()) <= 25:
        score += 5
    if any(word in lowered for word in IMPACT_WORDS):
        score += 5

    return score


def _start_key(exp: WorkExperience) -> datetime:
    return exp.start_date or datetime.min


def _has_overlapping_dates(experiences: List[SelectedExperience], now: datetime) -> bool:
    for current, following in zip(experiences, experiences[1:]):
        current_start, current_end = _start_key(current), current.end_date or now
        next_start, next_end = _start_key(following), following.end_date or now
        if current_start <= next_end and next_start <= current_end:
            return True
    return False


def _top_achievements(experiences: List[SelectedExperience], limit: int) -> List[str]:
    best: Dict[str, int] = {}
    for exp in experiences:
        for achievement in exp.achievements:
            text = achievement.strip()
            best[text] = max(best.get(text, 0), score_achievement(text))
    ranked = sorted(best.items(), key=lambda item: -item[1])
    return [text for text, _ in ranked[:limit]]


def _all_technologies(experiences: List[SelectedExperience]) -> List[str]:
    return list(dict.fromkeys(tech for exp in experiences for tech in exp.technologies))


def _combine(experiences: List[SelectedExperience], position: str, limit: int) -> SelectedExperience:
    # experiences are newest first
    primary = experiences[0]
    combined = _scored(SelectedExperience, primary, max(e.relevance_score for e in experiences))
    combined.position = position
    combined.start_date = experiences[-1].start_date
    ends = [e.end_date for e in experiences]
    combined.end_date = None if None in ends else max(ends)
    combined.achievements = _top_achievements(experiences, limit)
    combined.technologies = _all_technologies(experiences)
    return combined


def consolidate_company_experiences(
    experiences: List[SelectedExperience],
    now: Optional[datetime] = None,
) -> List[SelectedExperience]:
    """
    Collapse multiple roles at the same company into one entry.

    Duplicates (one position, overlapping dates) merge into a single role.
    Anything else becomes a career progression titled
    "Latest Role (promoted from Earlier Role, ...)".

    Returns:
        Consolidated experiences sorted by start date, newest first
    """
    now = resolve_now(now)
    groups: Dict[str, List[SelectedExperience]] = {}
    for exp in experiences:
        groups.setdefault(normalize_company_name(exp.company), []).append(exp)

    consolidated = []
    for group in groups.values():
        if len(group) == 1:
            consolidated.append(group[0])
            continue
        ordered = sorted(group, key=_start_key, reverse=True)
        unique_positions = {(e.position or "").lower().strip() for e in ordered}
        if len(unique_positions) == 1 and _has_overlapping_dates(ordered, now):
            consolidated.append(_combine(ordered, ordered[0].position, MERGED_ACHIEVEMENTS))
        else:
            positions = list(dict.fromkeys(e.position for e in ordered))
            title = positions[0]
            if len(positions) > 1:
                title = f"{positions[0]} (promoted from {', '.join(positions[1:])})"
            consolidated.append(_combine(ordered, title, PROGRESSION_ACHIEVEMENTS))

    return sorted(consolidated, key=_start_key, reverse=True)


def _top(items, limit):
    return sorted(items, key=lambda item: -item.relevance_score)[:limit]


def select_relevant_content(
    profile: CandidateProfile,
    job_analysis: JobAnalysis,
    now: Optional[datetime] = None,
) -> SelectedContent:
    """
    Pick the profile items most relevant to a job.

    Args:
        profile: Full candidate profile
        job_analysis: Analyzed job description
        now: Reference time for recency bonuses (default: utcnow)

    Returns:
        SelectedContent with relevance scores on experiences, skills and projects
    """
    now = resolve_now(now)
    keywords = collect_job_keywords(job_analysis)

    experiences = [
        _scored(SelectedExperience, exp, experience_relevance(exp, keywords, now))
        for exp in profile.experience
    ]
    skills = [_scored(SelectedSkill, skill, skill_relevance(skill, keywords)) for skill in profile.skills]
    projects = [
        _scored(SelectedProject, project, project_relevance(project, keywords, now))
        for project in profile.projects
    ]

    return SelectedContent(
        personal_info=profile.personal_info,
        summary=profile.summary or "",
        experience=_top(consolidate_company_experiences(experiences, now), MAX_EXPERIENCES),
        education=list(profile.education),
        skills=_top(skills, MAX_SKILLS),
        projects=_top(projects, MAX_PROJECTS),
    )
