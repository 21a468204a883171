import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .database import ScoreRecord, get_session, init_database
from .errors import InvalidArgumentError
from .logger import get_logger
from .models import ATSScoreResult, JobAnalysis


def load_snapshot(path: Path) -> Dict[str, Any]:
    """Read a JSON profile or job analysis file."""
    path = Path(path)
    if not path.exists():
        raise InvalidArgumentError(f"Input file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"Invalid JSON in {path}: {e}") from e


def save_score(db_path: Path, job: JobAnalysis, result: ATSScoreResult) -> int:
    """Persist a score result and return its record id."""
    db_path = Path(db_path)
    init_database(db_path)
    session = get_session(db_path)
    try:
        record = ScoreRecord(
            company=job.company,
            position=job.position,
            experience_level=job.experience_level or "",
            overall=result.overall,
            keyword_match=result.breakdown.keyword_match,
            experience_relevance=result.breakdown.experience_relevance,
            format_parseability=result.breakdown.format_parseability,
            education_match=result.breakdown.education_match,
            missing_keywords=json.dumps(result.missing_keywords),
            suggestions=json.dumps(result.suggestions),
        )
        session.add(record)
        session.commit()
        record_id = record.id
    finally:
        session.close()

    get_logger().info("Saved ATS score", record_id=record_id, company=job.company, overall=result.overall)
    return record_id


def list_scores(db_path: Path, company: Optional[str] = None, limit: int = 20) -> List[ScoreRecord]:
    """Stored scores, newest first. An absent database yields an empty list."""
    db_path = Path(db_path)
    if not db_path.exists():
        return []
    session = get_session(db_path)
    try:
        query = session.query(ScoreRecord)
        if company:
            query = query.filter(ScoreRecord.company.ilike(company))
        records = (
            query.order_by(ScoreRecord.created_at.desc(), ScoreRecord.id.desc())
            .limit(limit)
            .all()
        )
        session.expunge_all()
        return records
    finally:
        session.close()


def prune_scores(db_path: Path, days: int = 90) -> Tuple[int, int]:
    """
    Delete score records older than ``days``.

    Returns:
        Tuple of (records_before, records_after)
    """
    db_path = Path(db_path)
    if not db_path.exists():
        return (0, 0)

    cutoff = datetime.now() - timedelta(days=days)
    session = get_session(db_path)
    try:
        before = session.query(ScoreRecord).count()
        session.query(ScoreRecord).filter(ScoreRecord.created_at < cutoff).delete()
        session.commit()
        after = session.query(ScoreRecord).count()
    finally:
        session.close()

    get_logger().info(
        f"Prune complete: {before - after} removed, {after} remaining",
        days_threshold=days,
    )
    return (before, after)
