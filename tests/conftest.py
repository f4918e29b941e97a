import os
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("OPENAI_API_KEY", "test-key")

from mockinterview.schemas import (  # noqa: E402
    CandidateContext,
    CandidateProfile,
    EducationItem,
    ExperienceItem,
    ProjectItem,
)


@pytest.fixture
def experience_items():
    return [
        ExperienceItem(
            id="exp1",
            job_title="Marketing Coordinator",
            company_name="BrightAds",
            start_date="2019-06",
            end_date="2021-12",
            description="Ran paid social campaigns and weekly reporting.",
        ),
        ExperienceItem(
            id="exp2",
            job_title="Marketing Specialist",
            company_name="Northwind",
            start_date="2022-01",
            end_date="Present",
        ),
    ]


@pytest.fixture
def project_items():
    return [
        ProjectItem(
            id="proj1",
            title="Inventory Tracker",
            description="Web app that tracks warehouse stock levels.",
            technologies_used=["Python", "FastAPI", "PostgreSQL"],
            project_url="https://example.com/inventory",
        )
    ]


@pytest.fixture
def rich_profile(experience_items, project_items):
    return CandidateProfile(
        role="Backend Engineer",
        profile_field="Software Engineering",
        key_skills=["Python", "SQL", "Docker"],
        work_experience=experience_items,
        projects=project_items,
        education_history=[
            EducationItem(id="edu1", degree="BSc Computer Science", institution="State University", year_of_completion="2019")
        ],
        accomplishments="Speaker at PyCon regional meetup",
    )


@pytest.fixture
def make_context():
    """Build a CandidateContext with sensible defaults."""
    def _make(**overrides):
        data = {
            "profile_field": "Software Engineering",
            "role": "Backend Engineer",
            "interview_duration_minutes": 30,
        }
        data.update(overrides)
        return CandidateContext(**data)
    return _make


@pytest.fixture
def raw_model_questions():
    """Model output with written questions first and an id missing."""
    return [
        {"id": "q5", "text": "Write a function that merges overlapping intervals.", "stage": "technical_written", "type": "jd_based"},
        {"id": "q1", "text": "Walk me through how you would design the orders API.", "stage": "oral", "type": "jd_based"},
        {"id": "", "text": "Describe a disagreement with a teammate.", "stage": "oral", "type": "jd_based"},
        {"id": "q4", "text": "Design a rate limiter for the public API.", "stage": "technical_written", "type": "jd_based"},
        {"id": "q2", "text": "How do you approach database migrations?", "stage": "oral", "type": "jd_based"},
    ]
