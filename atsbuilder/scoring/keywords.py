"""
Keyword match scoring (40% of the overall ATS score).

Matching is plain case-insensitive substring containment by default, so
"react" is found inside "reactive". Pass ``mode="word"`` to require
word boundaries instead.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List

from ..errors import InvalidArgumentError
from .common import round_score

MATCH_MODES = ("substring", "word")
MAX_MISSING = 10


@dataclass
class KeywordScore:
    score: int
    matched: int
    total: int
    missing: List[str] = field(default_factory=list)


def keyword_universe(job_skills: Iterable[str], job_keywords: Iterable[str]) -> List[str]:
    """Lower-cased union of skills then keywords, first occurrence wins."""
    seen = set()
    universe = []
    for keyword in list(job_skills) + list(job_keywords):
        lowered = keyword.lower()
        if lowered not in seen:
            seen.add(lowered)
            universe.append(lowered)
    return universe


def keyword_in_corpus(keyword: str, corpus: str, mode: str = "substring") -> bool:
    if mode == "word":
        pattern = r"(?<!\w)" + re.escape(keyword) + r"(?!\w)"
        return re.search(pattern, corpus) is not None
    return keyword in corpus


def score_keywords(
    corpus: str,
    job_skills: Iterable[str],
    job_keywords: Iterable[str],
    mode: str = "substring",
) -> KeywordScore:
    """
    Score how many job skills and keywords appear in the resume corpus.

    Args:
        corpus: Lower-cased resume text (see ``build_corpus``)
        job_skills: Skills extracted from the job description
        job_keywords: ATS keywords extracted from the job description
        mode: "substring" (default) or "word"

    Returns:
        KeywordScore with the first 10 missing keywords in union order
    """
    if mode not in MATCH_MODES:
        raise InvalidArgumentError(f"Unknown keyword match mode: {mode!r}")

    universe = keyword_universe(job_skills, job_keywords)
    total = len(universe)
    missing = [k for k in universe if not keyword_in_corpus(k, corpus, mode)]
    matched = total - len(missing)

    if total == 0:
        score = 100
    else:
        score = round_score(100 * matched / total)

    return KeywordScore(score=score, matched=matched, total=total, missing=missing[:MAX_MISSING])
