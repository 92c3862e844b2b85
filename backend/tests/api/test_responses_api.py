"""Tests for form responses: drafts, submission and per-role isolation."""

import uuid

import pytest

from app.models.form_response import FormResponse
from tests.helpers.seed import (
    create_test_agent,
    create_test_portal_user,
    create_test_provider,
    create_test_response,
    create_test_section,
)


def _save(client, headers, section, answers):
    return client.post(
        "/api/responses/save",
        json={
            "sectionId": str(section.id),
            "insuranceProviderId": section.insurance_provider_id,
            "responses": answers,
        },
        headers=headers,
    )


class TestDrafts:
    def test_save_creates_then_updates_single_draft(self, client, db, section, user_headers):
        first = _save(client, user_headers, section, {"q1": "Priya"})
        second = _save(client, user_headers, section, {"q1": "Priya S", "q2": "42"})

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["data"]["id"] == second.json()["data"]["id"]
        data = second.json()["data"]
        assert data["responses"] == {"q1": "Priya S", "q2": "42"}
        assert data["status"] == "DRAFT"
        assert data["isSubmitted"] is False
        assert db.query(FormResponse).count() == 1

    def test_save_rejects_section_of_other_provider(self, client, db, section, user_headers):
        other = create_test_provider(db, provider_id="other", name="Other")

        response = client.post(
            "/api/responses/save",
            json={"sectionId": str(section.id), "insuranceProviderId": other.id, "responses": {}},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid section for this insurance provider"

    def test_submit_locks_response(self, client, section, user_headers):
        saved = _save(client, user_headers, section, {"q1": "a"}).json()["data"]

        submitted = client.post(f"/api/responses/{saved['id']}/submit", headers=user_headers)
        again = client.post(f"/api/responses/{saved['id']}/submit", headers=user_headers)
        edit = _save(client, user_headers, section, {"q1": "b"})

        assert submitted.status_code == 200
        data = submitted.json()["data"]
        assert data["status"] == "SUBMITTED"
        assert data["isSubmitted"] is True
        assert data["submittedAt"] is not None
        assert again.status_code == 404
        assert again.json()["message"] == "Response not found or already submitted"
        assert edit.status_code == 400
        assert edit.json()["message"] == "Cannot edit submitted response"

    def test_cannot_submit_someone_elses_response(self, client, db, section, user_headers):
        owner = create_test_portal_user(db)
        response = create_test_response(db, owner, section)

        result = client.post(f"/api/responses/{response.id}/submit", headers=user_headers)

        assert result.status_code == 404

    def test_my_section_response(self, client, section, user_headers):
        empty = client.get(f"/api/responses/user/section/{section.id}", headers=user_headers)
        _save(client, user_headers, section, {"q1": "a"})
        found = client.get(f"/api/responses/user/section/{section.id}", headers=user_headers)

        assert empty.status_code == 200
        assert empty.json()["data"] is None
        assert found.json()["data"]["responses"] == {"q1": "a"}


class TestIsolation:
    @pytest.fixture
    def scenario(self, db, provider, section):
        other_provider = create_test_provider(db, provider_id="other", name="Other")
        other_section = create_test_section(db, other_provider, title="Other section")
        alice = create_test_portal_user(db)
        bob = create_test_portal_user(db)
        return {
            "alice": alice,
            "alice_here": create_test_response(db, alice, section),
            "alice_there": create_test_response(db, alice, other_section, submitted=True),
            "bob_here": create_test_response(db, bob, section),
        }

    def test_user_sees_only_own(self, client, scenario, auth_headers):
        response = client.get("/api/responses", headers=auth_headers(scenario["alice"]))

        ids = {r["id"] for r in response.json()["data"]}
        assert ids == {str(scenario["alice_here"].id), str(scenario["alice_there"].id)}

    def test_agent_sees_only_own_provider(self, client, scenario, agent_headers):
        response = client.get("/api/responses", headers=agent_headers)

        ids = {r["id"] for r in response.json()["data"]}
        assert ids == {str(scenario["alice_here"].id), str(scenario["bob_here"].id)}

    def test_agent_without_provider_forbidden(self, client, db, scenario, auth_headers):
        agent = create_test_agent(db, None)

        response = client.get("/api/responses", headers=auth_headers(agent))

        assert response.status_code == 403

    def test_admin_sees_all_and_filters(self, client, scenario, admin_headers):
        everything = client.get("/api/responses", headers=admin_headers)
        submitted = client.get(
            "/api/responses", params={"isSubmitted": "true"}, headers=admin_headers
        )
        by_user = client.get(
            "/api/responses", params={"userId": str(scenario["alice"].id)}, headers=admin_headers
        )

        assert len(everything.json()["data"]) == 3
        assert [r["id"] for r in submitted.json()["data"]] == [str(scenario["alice_there"].id)]
        assert len(by_user.json()["data"]) == 2

    def test_get_response_outside_scope_is_404(self, client, scenario, agent_headers):
        outside = client.get(f"/api/responses/{scenario['alice_there'].id}", headers=agent_headers)
        inside = client.get(f"/api/responses/{scenario['bob_here'].id}", headers=agent_headers)

        assert outside.status_code == 404
        assert inside.status_code == 200
        assert inside.json()["data"]["user"]["id"] == str(scenario["bob_here"].user_id)

    def test_get_unknown_response(self, client, admin_headers):
        response = client.get(f"/api/responses/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Response not found"
