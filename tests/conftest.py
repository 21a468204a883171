"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Any

from atsbuilder.logger import get_logger, reset_logger
from atsbuilder.models import CandidateProfile, JobAnalysis


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh global logger per test, writing only to a temp directory."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for tenure and recency."""
    return datetime(2025, 1, 1)


@pytest.fixture
def sample_profile_data() -> Dict[str, Any]:
    """Sample candidate: ~6.7 years across 2 roles, bachelor's with GPA 3.7."""
    return {
        "personalInfo": {
            "name": "John Doe",
            "email": "john@example.com",
            "phone": "+1234567890",
            "location": "San Francisco, CA",
        },
        "summary": (
            "Experienced software engineer with 5+ years of expertise in React, Node.js, "
            "and TypeScript. Proven track record of building scalable web applications "
            "and leading development teams."
        ),
        "experience": [
            {
                "company": "Tech Corp",
                "position": "Senior Software Engineer",
                "startDate": "2020-01-01",
                "endDate": None,
                "description": "Lead development of web applications",
                "achievements": [
                    "Built scalable microservices architecture using Node.js and Docker",
                    "Improved application performance by 40% through optimization",
                    "Mentored team of 5 junior developers",
                ],
                "technologies": ["React", "Node.js", "TypeScript", "Docker", "AWS"],
            },
            {
                "company": "StartupXYZ",
                "position": "Full Stack Developer",
                "startDate": "2018-06-01",
                "endDate": "2019-12-31",
                "description": "Developed full-stack web applications",
                "achievements": [
                    "Developed RESTful APIs serving 10,000+ daily users",
                    "Implemented CI/CD pipeline reducing deployment time by 60%",
                ],
                "technologies": ["JavaScript", "Express", "MongoDB", "React"],
            },
        ],
        "education": [
            {
                "institution": "University of California",
                "degree": "Bachelor's in Computer Science",
                "fieldOfStudy": "Computer Science",
                "startDate": "2014-09-01",
                "endDate": "2018-05-31",
                "gpa": 3.7,
                "achievements": ["Dean's List", "Graduated with Honors"],
            },
        ],
        "skills": [
            {"name": "React", "category": "technical", "proficiency": "expert", "yearsOfExperience": 5},
            {"name": "Node.js", "category": "technical", "proficiency": "expert", "yearsOfExperience": 5},
            {"name": "TypeScript", "category": "technical", "proficiency": "advanced", "yearsOfExperience": 4},
            {"name": "JavaScript", "category": "technical", "proficiency": "expert", "yearsOfExperience": 6},
            {"name": "Docker", "category": "technical", "proficiency": "advanced", "yearsOfExperience": 3},
            {"name": "AWS", "category": "technical", "proficiency": "intermediate", "yearsOfExperience": 2},
            {"name": "MongoDB", "category": "technical", "proficiency": "advanced", "yearsOfExperience": 3},
            {"name": "PostgreSQL", "category": "technical", "proficiency": "intermediate", "yearsOfExperience": 2},
        ],
        "projects": [
            {
                "title": "E-commerce Platform",
                "description": "Built a full-stack e-commerce platform with React and Node.js",
                "technologies": ["React", "Node.js", "PostgreSQL", "Stripe"],
                "url": "https://example.com",
                "githubUrl": "https://github.com/example",
                "startDate": "2021-01-01",
                "endDate": "2021-06-30",
                "highlights": [
                    "Implemented secure payment processing with Stripe",
                    "Built real-time inventory management system",
                ],
            },
        ],
    }


@pytest.fixture
def sample_job_data() -> Dict[str, Any]:
    """Senior full stack job analysis."""
    return {
        "company": "BigTech Inc",
        "position": "Senior Full Stack Engineer",
        "requirements": [
            {
                "text": "Bachelor's degree in Computer Science required",
                "category": "required",
                "type": "education",
                "importance": 0.9,
            },
            {
                "text": "5+ years of experience with React and Node.js",
                "category": "required",
                "type": "experience",
                "importance": 1.0,
            },
            {
                "text": "Experience with TypeScript and modern JavaScript",
                "category": "required",
                "type": "skill",
                "importance": 0.9,
            },
            {
                "text": "Knowledge of Docker and containerization",
                "category": "preferred",
                "type": "skill",
                "importance": 0.7,
            },
            {
                "text": "Experience with cloud platforms (AWS, Azure, GCP)",
                "category": "preferred",
                "type": "skill",
                "importance": 0.8,
            },
        ],
        "skills": [
            "React", "Node.js", "TypeScript", "JavaScript", "Docker",
            "AWS", "PostgreSQL", "REST API", "Microservices",
        ],
        "keywords": [
            "scalable", "performance", "optimization", "CI/CD",
            "agile", "team leadership", "mentoring",
        ],
        "experienceLevel": "senior",
    }


@pytest.fixture
def sample_profile(sample_profile_data) -> CandidateProfile:
    return CandidateProfile.from_dict(sample_profile_data)


@pytest.fixture
def sample_job(sample_job_data) -> JobAnalysis:
    return JobAnalysis.from_dict(sample_job_data)


@pytest.fixture
def profile_file(tmp_path, sample_profile_data) -> Path:
    """Sample profile written to a JSON file."""
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(sample_profile_data, indent=2))
    return path


@pytest.fixture
def job_file(tmp_path, sample_job_data) -> Path:
    """Sample job analysis written to a JSON file."""
    path = tmp_path / "job.json"
    path.write_text(json.dumps(sample_job_data, indent=2))
    return path
