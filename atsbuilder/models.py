"""
Value types shared by the scorer, content selection and job analysis.

Every type can be built from the camelCase JSON used by the resume
builder's REST API via ``from_dict``. Snapshots are read-only: nothing in
this package mutates a profile or job analysis passed to it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .dates import parse_date
from .errors import InvalidArgumentError
from .logger import get_logger
from .schema import MAX_GPA, validate_job_analysis, validate_profile


def coerce_number(value: Any, field_name: str) -> Optional[float]:
    """Return ``value`` as a float, or None when it is absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        get_logger().debug("Treating non-numeric field as absent", field=field_name, value=value)
        return None


def _gpa(value: Any) -> Optional[float]:
    gpa = coerce_number(value, "gpa")
    if gpa is not None and not 0 <= gpa <= MAX_GPA:
        get_logger().debug("Treating off-scale GPA as absent", field="gpa", value=value)
        return None
    return gpa


def _str(data: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return str(value)
    return ""


def _list(data: Dict[str, Any], key: str) -> List[str]:
    return [str(item) for item in (data.get(key) or [])]


def _date(data: Dict[str, Any], camel: str, snake: str) -> Optional[datetime]:
    return parse_date(data.get(camel, data.get(snake)))


@dataclass
class PersonalInfo:
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PersonalInfo":
        data = data or {}
        return cls(
            name=_str(data, "name"),
            email=_str(data, "email"),
            phone=_str(data, "phone"),
            location=_str(data, "location"),
            linkedin=_str(data, "linkedin", "linkedinUrl"),
            github=_str(data, "github", "githubUrl"),
            website=_str(data, "website", "websiteUrl"),
        )


@dataclass
class WorkExperience:
    company: str
    position: str
    start_date: Optional[datetime]
    end_date: Optional[datetime] = None  # None means ongoing
    description: str = ""
    achievements: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkExperience":
        return cls(
            company=_str(data, "company"),
            position=_str(data, "position"),
            start_date=_date(data, "startDate", "start_date"),
            end_date=_date(data, "endDate", "end_date"),
            description=_str(data, "description"),
            achievements=_list(data, "achievements"),
            technologies=_list(data, "technologies"),
        )


@dataclass
class EducationEntry:
    institution: str
    degree: str
    field_of_study: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    gpa: Optional[float] = None
    achievements: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EducationEntry":
        return cls(
            institution=_str(data, "institution"),
            degree=_str(data, "degree"),
            field_of_study=_str(data, "fieldOfStudy", "field_of_study"),
            start_date=_date(data, "startDate", "start_date"),
            end_date=_date(data, "endDate", "end_date"),
            gpa=_gpa(data.get("gpa")),
            achievements=_list(data, "achievements"),
        )


@dataclass
class SkillEntry:
    name: str = ""
    category: str = ""
    proficiency: str = ""
    years_of_experience: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkillEntry":
        years = data.get("yearsOfExperience", data.get("years_of_experience"))
        return cls(
            name=_str(data, "name"),
            category=_str(data, "category"),
            proficiency=_str(data, "proficiency"),
            years_of_experience=coerce_number(years, "yearsOfExperience"),
        )


@dataclass
class ProjectEntry:
    title: str
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    highlights: List[str] = field(default_factory=list)
    url: str = ""
    github_url: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectEntry":
        return cls(
            title=_str(data, "title"),
            description=_str(data, "description"),
            technologies=_list(data, "technologies"),
            highlights=_list(data, "highlights"),
            url=_str(data, "url"),
            github_url=_str(data, "githubUrl", "github_url"),
            start_date=_date(data, "startDate", "start_date"),
            end_date=_date(data, "endDate", "end_date"),
        )


PROFILE_COLLECTIONS = ("experience", "education", "skills", "projects")
JOB_COLLECTIONS = ("requirements", "skills", "keywords")


def _require_lists(obj: Any, names, kind: str) -> None:
    missing = [name for name in names if getattr(obj, name) is None]
    if missing:
        raise InvalidArgumentError(
            f"{kind} has undefined collections",
            [f"Field '{name}' must be a list, got None" for name in missing],
        )


@dataclass
class CandidateProfile:
    """Candidate snapshot consumed by the scorer.

    ``experience`` must be ordered most recent first: the recency bonus
    looks only at the first entry.
    """

    personal_info: PersonalInfo
    summary: Optional[str]
    experience: List[WorkExperience]
    education: List[EducationEntry]
    skills: List[SkillEntry]
    projects: List[ProjectEntry]

    def __post_init__(self):
        _require_lists(self, PROFILE_COLLECTIONS, "Candidate profile")
        if self.personal_info is None:
            self.personal_info = PersonalInfo()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CandidateProfile":
        """Parse and validate a profile dict.

        Raises:
            InvalidArgumentError: If the dict is missing or structurally invalid
        """
        errors = validate_profile(data)
        if errors:
            raise InvalidArgumentError("Invalid candidate profile", errors)
        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo", data.get("personal_info"))),
            summary=data.get("summary") or "",
            experience=[WorkExperience.from_dict(e) for e in data["experience"]],
            education=[EducationEntry.from_dict(e) for e in data["education"]],
            skills=[SkillEntry.from_dict(s) for s in data["skills"]],
            projects=[ProjectEntry.from_dict(p) for p in data["projects"]],
        )


@dataclass
class Requirement:
    text: str
    category: str = "required"
    type: str = "skill"
    importance: float = 0.5

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Requirement":
        importance = coerce_number(data.get("importance"), "importance")
        return cls(
            text=_str(data, "text"),
            category=_str(data, "category") or "required",
            type=_str(data, "type") or "skill",
            importance=0.5 if importance is None else importance,
        )


@dataclass
class JobAnalysis:
    company: str
    position: str
    requirements: List[Requirement]
    skills: List[str]
    keywords: List[str]
    experience_level: str = ""

    def __post_init__(self):
        _require_lists(self, JOB_COLLECTIONS, "Job analysis")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "JobAnalysis":
        """Parse and validate a job analysis dict.

        Raises:
            InvalidArgumentError: If the dict is missing or structurally invalid
        """
        errors = validate_job_analysis(data)
        if errors:
            raise InvalidArgumentError("Invalid job analysis", errors)
        return cls(
            company=_str(data, "company"),
            position=_str(data, "position"),
            requirements=[Requirement.from_dict(r) for r in data["requirements"]],
            skills=[str(s) for s in data["skills"]],
            keywords=[str(k) for k in data["keywords"]],
            experience_level=_str(data, "experienceLevel", "experience_level"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company,
            "position": self.position,
            "requirements": [
                {
                    "text": r.text,
                    "category": r.category,
                    "type": r.type,
                    "importance": r.importance,
                }
                for r in self.requirements
            ],
            "skills": list(self.skills),
            "keywords": list(self.keywords),
            "experienceLevel": self.experience_level,
        }


@dataclass
class ScoreBreakdown:
    keyword_match: int
    experience_relevance: int
    format_parseability: int
    education_match: int


@dataclass
class ATSScoreResult:
    overall: int
    breakdown: ScoreBreakdown
    missing_keywords: List[str]
    suggestions: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase shape served by the resume API."""
        return {
            "overall": self.overall,
            "breakdown": {
                "keywordMatch": self.breakdown.keyword_match,
                "experienceRelevance": self.breakdown.experience_relevance,
                "formatParseability": self.breakdown.format_parseability,
                "educationMatch": self.breakdown.education_match,
            },
            "missingKeywords": list(self.missing_keywords),
            "suggestions": list(self.suggestions),
        }
