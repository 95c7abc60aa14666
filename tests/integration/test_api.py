"""Integration tests for the HTTP API."""

import asyncio

import pytest

from app.config import Settings
from app.main import create_app
from app.services.store import MemoryStore


RESUME_PAYLOAD = {
    "personalInfo": {
        "fullName": "Jane Doe",
        "email": "jane@example.com",
        "linkedin": "linkedin.com/in/janedoe",
        "summary": "Backend engineer focused on Python services",
    },
    "experience": [
        {
            "id": "1",
            "company": "Acme",
            "position": "Python Developer",
            "startDate": "2020",
            "endDate": "",
            "current": True,
            "description": "Improved API latency by 30%",
        }
    ],
    "education": [],
    "skills": [{"id": "1", "name": "Python", "category": "Languages"}],
}


def _create_draft(client, name="My Resume"):
    response = client.post("/api/resumes", json={"name": name, "resumeData": RESUME_PAYLOAD})
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"

    health = client.get("/api/health").json()
    assert health["status"] == "healthy"
    assert health["storageBackend"] == "memory"


# ============================================
# Analysis
# ============================================


@pytest.mark.integration
def test_analyze_general(client):
    response = client.post("/api/analyze/general", json=RESUME_PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "general"
    # 60 + 8 (one role) + 5 (linkedin) + 10 (quantified)
    assert body["score"] == 83
    assert len(body["industryInsights"]) == 4
    assert "Quantifiable achievements mentioned" in body["strengths"]


@pytest.mark.integration
def test_analyze_general_accepts_empty_resume(client):
    response = client.post("/api/analyze/general", json={})

    assert response.status_code == 200
    assert response.json()["score"] == 60


@pytest.mark.integration
def test_analyze_general_accepts_long_full_name(client):
    payload = {"personalInfo": {"fullName": "A" * 101, "summary": "x" * 120}}
    response = client.post("/api/analyze/general", json=payload)

    assert response.status_code == 200
    assert response.json()["score"] == 70


@pytest.mark.integration
def test_analyze_ats(client):
    response = client.post("/api/analyze/ats", json={
        "resumeData": RESUME_PAYLOAD,
        "jobDescription": "Senior Python developer, Kubernetes",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "ats"
    assert 45 <= body["score"] <= 95
    assert "python" in body["keywordMatches"]
    assert body["missingKeywords"] == ["senior", "kubernetes"]
    assert body["suggestions"][0] == "Include these relevant keywords: senior, kubernetes"


@pytest.mark.integration
def test_analyze_ats_requires_job_description(client):
    response = client.post("/api/analyze/ats", json={"resumeData": RESUME_PAYLOAD, "jobDescription": "  "})

    assert response.status_code == 422
    assert "job description" in response.json()["detail"]


# ============================================
# Drafts
# ============================================


@pytest.mark.integration
def test_draft_crud(client):
    draft = _create_draft(client)
    resume_id = draft["id"]
    assert draft["resumeData"]["personalInfo"]["fullName"] == "Jane Doe"

    assert client.get(f"/api/resumes/{resume_id}").json()["name"] == "My Resume"

    changed = dict(RESUME_PAYLOAD, skills=[])
    response = client.put(f"/api/resumes/{resume_id}", json={"name": "Renamed", "resumeData": changed})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["resumeData"]["skills"] == []

    listed = client.get("/api/resumes").json()
    assert [r["id"] for r in listed] == [resume_id]

    assert client.delete(f"/api/resumes/{resume_id}").status_code == 204
    assert client.get(f"/api/resumes/{resume_id}").status_code == 404
    assert client.get("/api/resumes").json() == []


@pytest.mark.integration
def test_malformed_stored_records_do_not_break_listing(client, memory_store):
    draft = _create_draft(client)
    share_id = client.post("/api/shares", json={"name": "Public", "resumeData": RESUME_PAYLOAD}).json()["shareId"]
    for collection in ("saved_resumes", "public_resumes"):
        records = asyncio.run(memory_store.read_all(collection))
        asyncio.run(memory_store.write_all(collection, records + [{"id": "broken"}]))

    response = client.get("/api/resumes")
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [draft["id"]]

    response = client.get("/api/shares")
    assert response.status_code == 200
    assert [s["shareId"] for s in response.json()] == [share_id]

    assert client.get(f"/api/public/{share_id}").status_code == 200


@pytest.mark.integration
def test_draft_requires_name(client):
    response = client.post("/api/resumes", json={"name": "   ", "resumeData": RESUME_PAYLOAD})
    assert response.status_code == 422


@pytest.mark.integration
def test_update_unknown_draft(client):
    response = client.put("/api/resumes/missing", json={"name": "X", "resumeData": RESUME_PAYLOAD})
    assert response.status_code == 404


@pytest.mark.integration
def test_draft_entry_editing(client):
    resume_id = _create_draft(client)["id"]

    response = client.post(f"/api/resumes/{resume_id}/skills", json={"name": " Docker ", "category": "Tools"})
    assert response.status_code == 201
    skills = response.json()["resumeData"]["skills"]
    assert [s["name"] for s in skills] == ["Python", "Docker"]
    new_id = skills[1]["id"]

    response = client.patch(f"/api/resumes/{resume_id}/skills/{new_id}", json={"category": "DevOps"})
    assert response.status_code == 200
    assert response.json()["resumeData"]["skills"][1]["category"] == "DevOps"

    response = client.delete(f"/api/resumes/{resume_id}/skills/{new_id}")
    assert response.status_code == 200
    assert len(response.json()["resumeData"]["skills"]) == 1


@pytest.mark.integration
def test_draft_entry_errors(client):
    resume_id = _create_draft(client)["id"]

    assert client.post(f"/api/resumes/{resume_id}/skills", json={"name": ""}).status_code == 422
    assert client.post(f"/api/resumes/{resume_id}/hobbies", json={"name": "Chess"}).status_code == 422
    assert client.patch(f"/api/resumes/{resume_id}/experience/nope", json={"company": "X"}).status_code == 404
    assert client.post("/api/resumes/missing/skills", json={"name": "Go"}).status_code == 404


# ============================================
# Sharing
# ============================================


@pytest.mark.integration
def test_share_lifecycle(client):
    response = client.post("/api/shares", json={"name": "Public CV", "resumeData": RESUME_PAYLOAD})
    assert response.status_code == 201
    share = response.json()
    share_id = share["shareId"]
    assert share["shareUrl"] == f"https://resumes.example.com/resume/{share_id}"

    first = client.get(f"/api/public/{share_id}").json()
    second = client.get(f"/api/public/{share_id}").json()
    assert first["viewCount"] == 1
    assert second["viewCount"] == 2
    assert second["resumeData"]["personalInfo"]["fullName"] == "Jane Doe"

    response = client.patch(f"/api/shares/{share_id}/status", json={"isActive": False})
    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert client.get(f"/api/public/{share_id}").status_code == 404

    listed = client.get("/api/shares").json()
    assert [s["shareId"] for s in listed] == [share_id]

    response = client.put(f"/api/shares/{share_id}", json={"name": "Renamed", "resumeData": RESUME_PAYLOAD})
    assert response.json()["name"] == "Renamed"

    assert client.delete(f"/api/shares/{share_id}").status_code == 204
    assert client.get("/api/shares").json() == []


@pytest.mark.integration
def test_share_is_snapshot_of_draft(client):
    draft = _create_draft(client)
    share_id = client.post("/api/shares", json={"name": "Snap", "resumeData": draft["resumeData"]}).json()["shareId"]

    client.put(f"/api/resumes/{draft['id']}", json={"name": "Draft", "resumeData": dict(RESUME_PAYLOAD, skills=[])})

    public = client.get(f"/api/public/{share_id}").json()
    assert len(public["resumeData"]["skills"]) == 1


@pytest.mark.integration
def test_unknown_share(client):
    assert client.get("/api/public/missing").status_code == 404
    assert client.patch("/api/shares/missing/status", json={"isActive": True}).status_code == 404
    assert client.put("/api/shares/missing", json={"name": "X"}).status_code == 404


@pytest.mark.integration
def test_lifespan_builds_and_closes_store():
    from fastapi.testclient import TestClient

    app = create_app(settings=Settings(redis_url=None))
    with TestClient(app) as client:
        assert isinstance(app.state.store, MemoryStore)
        assert client.get("/api/health").json()["storageBackend"] == "memory"
