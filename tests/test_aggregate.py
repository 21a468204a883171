"""
Tests for ATS score aggregation and suggestions.
"""

import copy
import math
import random
from datetime import datetime, timezone

import pytest

from atsbuilder.errors import InvalidArgumentError
from atsbuilder.logger import get_logger
from atsbuilder.scoring import calculate_ats_score, overall_weighted, round_score
from atsbuilder.scoring.aggregate import NO_SUGGESTIONS_MESSAGE


def random_variant(rng, profile_data, job_data):
    """Drop random sections and keywords to get varied inputs."""
    profile = copy.deepcopy(profile_data)
    job = copy.deepcopy(job_data)
    for section in ("experience", "education", "skills", "projects"):
        profile[section] = [e for e in profile[section] if rng.random() < 0.6]
    if rng.random() < 0.3:
        profile["summary"] = ""
    if rng.random() < 0.3:
        profile["personalInfo"]["phone"] = ""
    job["skills"] = [s for s in job["skills"] if rng.random() < 0.7]
    job["keywords"] = [k for k in job["keywords"] if rng.random() < 0.7] + ["kafka"] * rng.randint(0, 1)
    job["experienceLevel"] = rng.choice(["entry", "junior", "mid", "senior", "lead", "principal", ""])
    return profile, job


class TestRounding:
    """Test half-up rounding."""

    @pytest.mark.parametrize("value,expected", [
        (72.5, 73),
        (88.5, 89),
        (0.5, 1),
        (66.666, 67),
        (66.4, 66),
    ])
    def test_round_half_up(self, value, expected):
        assert round_score(value) == expected


class TestOverallWeighted:
    """Test the 40/30/20/10 weighting."""

    def test_random_sub_scores(self):
        rng = random.Random(42)
        for _ in range(500):
            k, e, f, ed = (rng.randint(0, 100) for _ in range(4))
            expected = math.floor(0.4 * k + 0.3 * e + 0.2 * f + 0.1 * ed + 0.5)
            assert overall_weighted(k, e, f, ed) == expected

    @pytest.mark.parametrize("scores,expected", [
        ((75, 95, 100, 100), 89),
        ((100, 100, 100, 100), 100),
        ((0, 0, 0, 0), 0),
        ((0, 0, 0, 5), 1),
    ])
    def test_known_values(self, scores, expected):
        assert overall_weighted(*scores) == expected


class TestCalculateAtsScore:
    """Test the aggregate ATS score."""

    def test_sample_scenario(self, sample_profile, sample_job, now):
        result = calculate_ats_score(sample_profile, sample_job, now=now)

        assert result.breakdown.keyword_match == 75
        assert result.breakdown.experience_relevance == 95
        assert result.breakdown.format_parseability == 100
        assert result.breakdown.education_match == 100
        assert result.overall == 89
        assert result.missing_keywords == ["rest api", "agile", "team leadership", "mentoring"]
        assert result.suggestions == [
            "Consider adding these skills if you have them: rest api, agile, team leadership"
        ]

    def test_dict_inputs_match_dataclasses(self, sample_profile_data, sample_job_data, sample_profile, sample_job, now):
        from_dicts = calculate_ats_score(sample_profile_data, sample_job_data, now=now)
        from_objects = calculate_ats_score(sample_profile, sample_job, now=now)
        assert from_dicts == from_objects

    def test_partial_profile_data(self, sample_profile_data, sample_job_data, now):
        """An unnamed skill and a percentage-scale GPA are scored, not rejected."""
        sample_profile_data["skills"].append({"category": "tools"})
        sample_profile_data["education"][0]["gpa"] = 85

        result = calculate_ats_score(sample_profile_data, sample_job_data, now=now)

        assert result.breakdown.keyword_match == 75
        # GPA bonus dropped: bachelor's match 90 + achievements 5
        assert result.breakdown.education_match == 95
        assert result.overall == 88

    def test_timezone_aware_now(self, sample_profile, sample_job, now):
        aware = calculate_ats_score(sample_profile, sample_job, now=now.replace(tzinfo=timezone.utc))
        assert aware == calculate_ats_score(sample_profile, sample_job, now=now)

        current = calculate_ats_score(sample_profile, sample_job, now=datetime.now(timezone.utc))
        assert 0 <= current.overall <= 100

    def test_idempotent(self, sample_profile, sample_job, now):
        first = calculate_ats_score(sample_profile, sample_job, now=now)
        second = calculate_ats_score(sample_profile, sample_job, now=now)
        assert first == second

    def test_weighted_sum_and_bounds_on_samples(self, sample_profile_data, sample_job_data, now):
        """Overall is always the rounded weighted sum of the breakdown, within [0, 100]."""
        rng = random.Random(1234)
        for _ in range(50):
            profile, job = random_variant(rng, sample_profile_data, sample_job_data)
            result = calculate_ats_score(profile, job, now=now)
            b = result.breakdown

            scores = [b.keyword_match, b.experience_relevance, b.format_parseability, b.education_match]
            assert all(0 <= s <= 100 for s in scores)
            assert 0 <= result.overall <= 100
            assert result.overall == overall_weighted(*scores)
            assert len(result.missing_keywords) <= 10
            assert result.suggestions

    def test_missing_keywords_limited(self, sample_profile, sample_job_data, now):
        sample_job_data["keywords"] = [f"unheard-of-tool-{i}" for i in range(20)]
        result = calculate_ats_score(sample_profile, sample_job_data, now=now)
        assert len(result.missing_keywords) == 10

    def test_word_mode(self, sample_profile, sample_job, now):
        result = calculate_ats_score(sample_profile, sample_job, now=now, match_mode="word")
        assert result.breakdown.keyword_match == 75

    def test_vacuous_job_gets_positive_message(self, sample_profile_data, now):
        job = {"requirements": [], "skills": [], "keywords": [], "experienceLevel": "senior"}
        result = calculate_ats_score(sample_profile_data, job, now=now)

        assert result.breakdown.keyword_match == 100
        assert result.missing_keywords == []
        # No degree level required: bachelor's held scores 85, plus two bonuses
        assert result.breakdown.education_match == 95
        assert result.suggestions == [NO_SUGGESTIONS_MESSAGE]

    def test_suggestion_order(self, now):
        """Low sub-scores produce suggestions in keyword, experience, format, education order."""
        profile = {"summary": "", "experience": [], "education": [], "skills": [], "projects": []}
        job = {"requirements": [], "skills": ["Rust", "Go", "Elixir", "Zig"], "keywords": [], "experienceLevel": ""}
        result = calculate_ats_score(profile, job, now=now)

        assert result.suggestions == [
            "Incorporate more job-specific keywords. Missing: rust, go, elixir, zig",
            "Highlight more relevant work experience that aligns with the job requirements",
            "Improve resume structure by adding more detailed achievements and bullet points",
            "Ensure your education section clearly lists relevant degrees and achievements",
            "Consider adding these skills if you have them: rust, go, elixir",
        ]

    def test_to_dict_shape(self, sample_profile, sample_job, now):
        data = calculate_ats_score(sample_profile, sample_job, now=now).to_dict()
        assert set(data) == {"overall", "breakdown", "missingKeywords", "suggestions"}
        assert set(data["breakdown"]) == {
            "keywordMatch", "experienceRelevance", "formatParseability", "educationMatch",
        }


class TestInvalidInput:
    """Test rejection of missing or malformed inputs."""

    def test_none_profile(self, sample_job):
        with pytest.raises(InvalidArgumentError):
            calculate_ats_score(None, sample_job)

    def test_none_job(self, sample_profile):
        with pytest.raises(InvalidArgumentError):
            calculate_ats_score(sample_profile, None)

    def test_undefined_collection(self, sample_profile_data, sample_job):
        sample_profile_data["skills"] = None
        with pytest.raises(InvalidArgumentError) as exc_info:
            calculate_ats_score(sample_profile_data, sample_job)
        assert "skills" in str(exc_info.value)

    def test_failures_are_counted(self, sample_job):
        with pytest.raises(InvalidArgumentError):
            calculate_ats_score(None, sample_job)
        metrics = get_logger().get_metrics()
        assert metrics["score_failures"] == 1
        assert metrics["errors_by_type"] == {"InvalidArgumentError": 1}

    def test_successes_are_counted(self, sample_profile, sample_job, now):
        calculate_ats_score(sample_profile, sample_job, now=now)
        metrics = get_logger().get_metrics()
        assert metrics["scores_computed"] == 1
        assert metrics["average_overall"] == 89
