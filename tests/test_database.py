"""
Tests for database.py and storage.py - score history in SQLite.
"""

import json
import pytest
from datetime import datetime, timedelta

from atsbuilder.database import ScoreRecord, init_database, get_session
from atsbuilder.errors import InvalidArgumentError
from atsbuilder.scoring import calculate_ats_score
from atsbuilder.storage import list_scores, load_snapshot, prune_scores, save_score


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        """Test that init_database creates the scores table."""
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        assert session.query(ScoreRecord).count() == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that init_database creates parent directories if missing."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        init_database(db_path)

        assert db_path.exists()


class TestScoreRecord:
    """Test the ScoreRecord model."""

    def test_json_columns(self, tmp_path):
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)

        record = ScoreRecord(
            company="Acme",
            position="Dev",
            overall=80,
            keyword_match=70,
            experience_relevance=90,
            format_parseability=85,
            education_match=75,
            missing_keywords=json.dumps(["go", "rust"]),
        )
        session.add(record)
        session.commit()

        stored = session.query(ScoreRecord).one()
        assert stored.missing_keywords_list == ["go", "rust"]
        assert stored.suggestions_list == []
        assert isinstance(stored.created_at, datetime)
        session.close()


class TestScoreHistory:
    """Test saving, listing and pruning scores."""

    @pytest.fixture
    def scored(self, sample_profile, sample_job, now):
        return calculate_ats_score(sample_profile, sample_job, now=now)

    def test_save_and_list(self, tmp_path, sample_job, scored):
        db_path = tmp_path / "scores.db"
        record_id = save_score(db_path, sample_job, scored)

        records = list_scores(db_path)
        assert len(records) == 1
        record = records[0]
        assert record.id == record_id
        assert record.company == "BigTech Inc"
        assert record.experience_level == "senior"
        assert record.overall == scored.overall
        assert record.keyword_match == scored.breakdown.keyword_match
        assert record.missing_keywords_list == scored.missing_keywords
        assert record.suggestions_list == scored.suggestions

    def test_list_newest_first_with_limit(self, tmp_path, sample_job, scored):
        db_path = tmp_path / "scores.db"
        ids = [save_score(db_path, sample_job, scored) for _ in range(3)]

        records = list_scores(db_path, limit=2)
        assert [r.id for r in records] == [ids[2], ids[1]]

    def test_filter_by_company(self, tmp_path, sample_job, scored):
        db_path = tmp_path / "scores.db"
        save_score(db_path, sample_job, scored)
        sample_job.company = "Other Co"
        save_score(db_path, sample_job, scored)

        records = list_scores(db_path, company="bigtech inc")
        assert [r.company for r in records] == ["BigTech Inc"]

    def test_missing_database(self, tmp_path):
        assert list_scores(tmp_path / "absent.db") == []
        assert prune_scores(tmp_path / "absent.db") == (0, 0)

    def test_prune_old_records(self, tmp_path, sample_job, scored):
        db_path = tmp_path / "scores.db"
        save_score(db_path, sample_job, scored)

        session = get_session(db_path)
        session.add(ScoreRecord(
            company="Old",
            position="Dev",
            overall=50,
            keyword_match=50,
            experience_relevance=50,
            format_parseability=50,
            education_match=50,
            created_at=datetime.now() - timedelta(days=120),
        ))
        session.commit()
        session.close()

        before, after = prune_scores(db_path, days=90)

        assert (before, after) == (2, 1)
        assert [r.company for r in list_scores(db_path)] == ["BigTech Inc"]


class TestLoadSnapshot:
    """Test reading JSON inputs."""

    def test_load(self, profile_file, sample_profile_data):
        assert load_snapshot(profile_file) == sample_profile_data

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidArgumentError):
            load_snapshot(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(InvalidArgumentError) as exc_info:
            load_snapshot(path)
        assert "Invalid JSON" in str(exc_info.value)
