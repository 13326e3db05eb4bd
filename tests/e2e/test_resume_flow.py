from __future__ import annotations

import io

from conftest import AI_RESUME, BIDDER, MANAGER
from docx import Document
from fastapi.testclient import TestClient

from bidforge.api.app import create_app
from bidforge.api.deps import get_generator


def _as(principal) -> dict[str, str]:
    return {"X-User-Id": principal.user_id}


def test_generate_download_save_then_block_duplicate(generator, fake_client, seeded) -> None:
    app = create_app()
    app.dependency_overrides[get_generator] = lambda: generator
    client = TestClient(app)
    profile_id = seeded["profile_id"]

    current = client.get(f"/api/profiles/{profile_id}", headers=_as(MANAGER)).json()
    client.put(
        f"/api/profiles/{profile_id}",
        json={**current, "resume_filename_format": "first_last_job_company"},
        headers=_as(MANAGER),
    )

    fake_client.queue(AI_RESUME)
    generated = client.post(
        "/api/resumes/generate",
        json={"profileId": profile_id, "jobDescription": "Senior Backend Engineer at Acme Corp"},
        headers=_as(BIDDER),
    )
    assert generated.status_code == 200
    resume = generated.json()["resume"]

    download = client.post(
        "/api/resumes/download",
        json={
            "profileId": profile_id,
            "resume": resume,
            "jobDescription": "Senior Backend Engineer at Acme Corp",
            "jobDescriptionLink": "https://jobs.example.com/acme",
            "save": True,
        },
        headers=_as(BIDDER),
    )
    assert download.status_code == 200
    assert download.headers["content-disposition"] == (
        'attachment; filename="Jane_Doe_Senior Backend Engineer-Acme Corp.docx"'
    )
    texts = [p.text for p in Document(io.BytesIO(download.content)).paragraphs]
    assert "Lead Backend Engineer at Globex" in texts

    application_id = int(download.headers["x-application-id"])
    record = client.get(f"/api/job-applications/{application_id}", headers=_as(MANAGER)).json()
    assert record["company_name"] == "Acme Corp"
    assert record["resume_file_name"] == "Jane_Doe_Senior Backend Engineer-Acme Corp.docx"
    assert record["job_description_link"] == "https://jobs.example.com/acme"
    assert record["generated_skills"] == AI_RESUME["skills"]

    # a second posting at the same company is refused after the model call
    fake_client.queue(AI_RESUME)
    blocked = client.post(
        "/api/resumes/generate",
        json={"profileId": profile_id, "jobDescription": "Another Acme role"},
        headers=_as(BIDDER),
    )
    assert blocked.status_code == 409
    assert "Acme Corp" in blocked.json()["detail"]

    # once rejected, the company is open again
    client.post(f"/api/job-applications/{application_id}/reject", headers=_as(MANAGER))
    fake_client.queue(AI_RESUME)
    retried = client.post(
        "/api/resumes/generate",
        json={"profileId": profile_id, "jobDescription": "Another Acme role"},
        headers=_as(BIDDER),
    )
    assert retried.status_code == 200


def test_missing_profile_makes_no_model_call(generator, fake_client, seeded) -> None:
    app = create_app()
    app.dependency_overrides[get_generator] = lambda: generator
    client = TestClient(app)

    response = client.post(
        "/api/resumes/generate", json={"jobDescription": "Backend role"}, headers=_as(BIDDER)
    )

    assert response.status_code == 400
    assert fake_client.calls == []
