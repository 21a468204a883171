import re
from typing import Iterable, List, Optional

COMPANY_SUFFIX_RE = re.compile(r"\b(inc|corp|corporation|ltd|limited|llc)\b\.?", re.IGNORECASE)


def normalize_text(s: Optional[str]) -> str:
    return " ".join((s or "").strip().lower().split())


def normalize_company_name(company: Optional[str]) -> str:
    """Lower-case, collapse whitespace and drop legal suffixes (Inc, LLC, ...)."""
    return COMPANY_SUFFIX_RE.sub("", normalize_text(company)).strip()


def _text(value: Optional[str]) -> str:
    # None still takes a slot in the join
    return "" if value is None else str(value)


def corpus_parts(profile) -> List[str]:
    """Resume text fields in corpus order, before joining."""
    parts: List[str] = [_text(profile.summary)]
    for exp in profile.experience:
        parts.append(_text(exp.position))
        parts.append(_text(exp.description))
        parts.extend(_text(a) for a in exp.achievements)
    parts.extend(_text(skill.name) for skill in profile.skills)
    for project in profile.projects:
        parts.append(_text(project.title))
        parts.append(_text(project.description))
        parts.extend(_text(h) for h in project.highlights)
    return parts


def build_corpus(profile) -> str:
    """Searchable, lower-cased text of a candidate profile.

    Order: summary; each experience's position, description and
    achievements; skill names; each project's title, description and
    highlights. Parts are joined with single spaces without de-duplication.
    """
    return " ".join(corpus_parts(profile)).lower()


def join_lower(values: Iterable[Optional[str]]) -> str:
    return " ".join(_text(v) for v in values).lower()
