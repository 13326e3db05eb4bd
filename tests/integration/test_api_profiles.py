from __future__ import annotations

from conftest import ADMIN, BIDDER, MANAGER, OTHER_BIDDER, OTHER_MANAGER, sample_profile
from fastapi.testclient import TestClient

from bidforge.api.app import create_app


def _as(principal) -> dict[str, str]:
    return {"X-User-Id": principal.user_id}


def test_requests_without_a_known_user_are_unauthorized(seeded) -> None:
    client = TestClient(create_app())

    assert client.get("/api/profiles").status_code == 401
    assert client.get("/api/profiles", headers={"X-User-Id": "ghost"}).status_code == 401


def test_inactive_user_is_forbidden(seeded) -> None:
    client = TestClient(create_app())
    client.put(f"/api/users/{BIDDER.user_id}/active", json={"is_active": False}, headers=_as(ADMIN))

    assert client.get("/api/profiles", headers=_as(BIDDER)).status_code == 403


def test_profile_create_update_and_list(seeded) -> None:
    client = TestClient(create_app())

    create_resp = client.post(
        "/api/profiles", json=sample_profile(first_name="Sam").model_dump(), headers=_as(OTHER_MANAGER)
    )
    assert create_resp.status_code == 201
    created = create_resp.json()
    assert created["user_id"] == OTHER_MANAGER.user_id
    assert created["owner"]["id"] == OTHER_MANAGER.user_id
    assert [item["company"] for item in created["experience"]] == ["Globex", "Initech"]

    payload = sample_profile(first_name="Samuel", skills=["Go"]).model_dump()
    update_resp = client.put(f"/api/profiles/{created['id']}", json=payload, headers=_as(OTHER_MANAGER))
    assert update_resp.status_code == 200
    assert update_resp.json()["first_name"] == "Samuel"
    assert update_resp.json()["skills"] == ["Go"]

    listed = client.get("/api/profiles", headers=_as(OTHER_MANAGER)).json()
    assert [item["id"] for item in listed] == [created["id"]]

    hidden = client.put(f"/api/profiles/{created['id']}", json=payload, headers=_as(MANAGER))
    assert hidden.status_code == 404


def test_bidder_sees_assigned_profile_but_cannot_edit(seeded) -> None:
    client = TestClient(create_app())
    profile_id = seeded["profile_id"]

    listed = client.get("/api/profiles", headers=_as(BIDDER)).json()
    assert [item["id"] for item in listed] == [profile_id]
    assert [item["id"] for item in listed[0]["assigned_bidders"]] == [BIDDER.user_id]

    response = client.post("/api/profiles", json=sample_profile().model_dump(), headers=_as(BIDDER))
    assert response.status_code == 403
    assert client.get(f"/api/profiles/{profile_id}", headers=_as(OTHER_BIDDER)).status_code == 404


def test_assignment_endpoints(seeded) -> None:
    client = TestClient(create_app())
    profile_id = seeded["profile_id"]

    bidders = client.get("/api/profiles/bidders", headers=_as(MANAGER)).json()
    assert {item["id"] for item in bidders} == {BIDDER.user_id, OTHER_BIDDER.user_id}

    created = client.post(
        f"/api/profiles/{profile_id}/assignments",
        json={"bidder_id": OTHER_BIDDER.user_id},
        headers=_as(MANAGER),
    )
    assert created.status_code == 201
    assert created.json()["assigned_by"] == MANAGER.user_id

    duplicate = client.post(
        f"/api/profiles/{profile_id}/assignments",
        json={"bidder_id": OTHER_BIDDER.user_id},
        headers=_as(MANAGER),
    )
    assert duplicate.status_code == 409

    removed = client.delete(f"/api/profiles/{profile_id}/assignments/{OTHER_BIDDER.user_id}", headers=_as(ADMIN))
    assert removed.status_code == 204
    listed = client.get(f"/api/profiles/{profile_id}/assignments", headers=_as(MANAGER)).json()
    assert [item["bidder_id"] for item in listed] == [BIDDER.user_id]


def test_delete_profile(seeded) -> None:
    client = TestClient(create_app())
    profile_id = seeded["profile_id"]

    assert client.delete(f"/api/profiles/{profile_id}", headers=_as(OTHER_MANAGER)).status_code == 404
    assert client.delete(f"/api/profiles/{profile_id}", headers=_as(BIDDER)).status_code == 403
    assert client.delete(f"/api/profiles/{profile_id}", headers=_as(MANAGER)).status_code == 204
    assert client.get(f"/api/profiles/{profile_id}", headers=_as(ADMIN)).status_code == 404


def test_user_admin_endpoints(seeded) -> None:
    client = TestClient(create_app())

    assert client.get("/api/users", headers=_as(MANAGER)).status_code == 403
    me = client.get("/api/users/me", headers=_as(BIDDER)).json()
    assert me["role"] == "bidder"

    created = client.post(
        "/api/users", json={"id": "bidder-3", "email": "b3@example.com", "role": "bidder"}, headers=_as(ADMIN)
    )
    assert created.status_code == 201
    assert client.post("/api/users", json={"id": "bidder-3"}, headers=_as(ADMIN)).status_code == 409

    promoted = client.put("/api/users/bidder-3/role", json={"role": "manager"}, headers=_as(ADMIN))
    assert promoted.json()["role"] == "manager"

    assert client.delete("/api/users/bidder-3", headers=_as(ADMIN)).status_code == 204
    assert "bidder-3" not in {item["id"] for item in client.get("/api/users", headers=_as(ADMIN)).json()}


def test_health() -> None:
    client = TestClient(create_app())

    assert client.get("/health").json() == {"status": "ok"}
