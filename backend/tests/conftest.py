"""Shared test configuration, pytest markers and score fixtures."""

import pytest

from models.schemas import ATSScore, ResumeData, ScoreBreakdown
from models.schemas.resume_data import ExperienceEntry, SkillCategory


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scoring: runs the full ATS scorer end to end"
    )


def make_score(total: float) -> ATSScore:
    """ATSScore whose breakdown sums to ``total`` (0-100, current scheme)."""
    keyword = min(total, 45.0)
    skills = min(total - keyword, 25.0)
    experience = min(total - keyword - skills, 20.0)
    content = round(total - keyword - skills - experience, 4)
    return ATSScore(
        breakdown=ScoreBreakdown(
            keyword_relevance=keyword,
            skills_quality=skills,
            experience_alignment=experience,
            content_quality=content,
        )
    )


SAMPLE_JD = """Senior Platform Engineer

About the role
You will lead our platform engineering team of 6 engineers.

Requirements:
- 8+ years of software engineering experience
- Python, Kubernetes, Terraform and AWS
- Experience with CI/CD and observability

Nice to have:
- Go or Rust
- Machine learning infrastructure
"""


@pytest.fixture
def sample_resume_data() -> ResumeData:
    return ResumeData(
        name="Alex Kim",
        title="Senior Platform Engineer",
        summary="Platform engineer building cloud infrastructure on AWS and Kubernetes.",
        years_experience=10,
        team_size="7 engineers",
        skills_by_category=[
            SkillCategory(category="Languages", items=["Python", "Go"]),
            SkillCategory(category="Infrastructure", items=["Kubernetes", "Terraform", "AWS"]),
        ],
        experiences=[
            ExperienceEntry(
                title="Staff Engineer",
                company="Acme",
                highlights=[
                    "Led a team of 7 engineers building the internal developer platform",
                    "Reduced deployment time by 60% with GitHub Actions CI/CD pipelines",
                    "Responsible for on-call rotation",
                ],
            ),
        ],
    )
