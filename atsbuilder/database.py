"""
Database schema and connection management.

Uses SQLite with SQLAlchemy to keep a history of calculated ATS scores.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import List

from sqlalchemy import create_engine, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class ScoreRecord(Base):
    """One ATS score calculation for a job."""

    __tablename__ = "ats_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company = Column(String, nullable=False, default="")
    position = Column(String, nullable=False, default="")
    experience_level = Column(String, nullable=False, default="")
    overall = Column(Integer, nullable=False)
    keyword_match = Column(Integer, nullable=False)
    experience_relevance = Column(Integer, nullable=False)
    format_parseability = Column(Integer, nullable=False)
    education_match = Column(Integer, nullable=False)
    missing_keywords = Column(Text, nullable=False, default="[]")  # JSON list
    suggestions = Column(Text, nullable=False, default="[]")  # JSON list
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    @property
    def missing_keywords_list(self) -> List[str]:
        return json.loads(self.missing_keywords or "[]")

    @property
    def suggestions_list(self) -> List[str]:
        return json.loads(self.suggestions or "[]")


def _engine(db_path: Path):
    return create_engine(f"sqlite:///{db_path}")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(_engine(db_path))


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=_engine(Path(db_path)))
    return Session()
