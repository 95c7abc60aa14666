"""Shared fixtures for unit and integration tests."""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.models.resume import Education, Experience, PersonalInfo, ResumeData, Skill
from app.services.store import MemoryStore


@pytest.fixture
def full_resume() -> ResumeData:
    """Resume that passes every structural check of the general analysis."""
    return ResumeData(
        personal_info=PersonalInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            linkedin="https://linkedin.com/in/janedoe",
            summary="x" * 150,
        ),
        experience=[
            Experience(
                id="exp1",
                company="Acme",
                position="Backend Engineer",
                description="Increased revenue by 20% by rebuilding the billing pipeline",
            ),
            Experience(
                id="exp2",
                company="Globex",
                position="Developer",
                description="Maintained internal tooling",
            ),
        ],
        education=[
            Education(id="edu1", institution="State University", degree="BSc", field="Computer Science"),
        ],
        skills=[Skill(id=f"s{i}", name=f"skill{i}") for i in range(10)],
    )


@pytest.fixture
def empty_resume() -> ResumeData:
    return ResumeData()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(memory_store):
    """API client backed by an in-memory store."""
    settings = Settings(share_base_url="https://resumes.example.com")
    app = create_app(settings=settings, store=memory_store)
    return TestClient(app)
