"""Tests for insurance provider endpoints."""

from app.models.question import Question
from app.models.section import Section
from tests.helpers.seed import create_test_provider, create_test_question


def test_list_providers_sorted_by_name(client, db, user_headers):
    create_test_provider(db, provider_id="zeta", name="Zeta Insure")
    create_test_provider(db, provider_id="alpha", name="Alpha Cover")

    response = client.get("/api/providers", headers=user_headers)

    assert response.status_code == 200
    assert [p["id"] for p in response.json()["data"]] == ["alpha", "zeta"]


def test_create_provider(client, admin_headers):
    response = client.post(
        "/api/providers",
        json={"id": "star-health", "name": "Star Health", "description": "Family plans"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["id"] == "star-health"
    assert data["isActive"] is True


def test_create_provider_duplicate_id(client, provider, admin_headers):
    response = client.post(
        "/api/providers", json={"id": provider.id, "name": "Again"}, headers=admin_headers
    )

    assert response.status_code == 409
    assert response.json()["message"] == "Provider ID already exists"


def test_create_provider_requires_admin(client, agent_headers):
    response = client.post(
        "/api/providers", json={"id": "x", "name": "X"}, headers=agent_headers
    )

    assert response.status_code == 403


def test_get_provider_not_found(client, user_headers):
    response = client.get("/api/providers/missing", headers=user_headers)

    assert response.status_code == 404
    assert response.json()["error_code"] == "INSURANCE_PROVIDER_NOT_FOUND"


def test_update_provider(client, provider, admin_headers):
    response = client.put(
        f"/api/providers/{provider.id}",
        json={"name": "Acme Renamed", "isActive": False},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Acme Renamed"
    assert data["isActive"] is False


def test_delete_provider_cascades(client, db, provider, section, admin_headers):
    create_test_question(db, section)

    response = client.delete(f"/api/providers/{provider.id}", headers=admin_headers)

    assert response.status_code == 200
    db.expire_all()
    assert db.query(Section).count() == 0
    assert db.query(Question).count() == 0
