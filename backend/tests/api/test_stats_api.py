"""Tests for dashboard statistics."""

from tests.helpers.seed import (
    create_test_agent,
    create_test_portal_user,
    create_test_provider,
    create_test_response,
    create_test_section,
)


def test_admin_stats(client, db, section, test_agent_user, admin_headers):
    inactive = create_test_provider(db, provider_id="old", name="Old", is_active=False)
    user = create_test_portal_user(db)
    create_test_response(db, user, section, submitted=True)
    create_test_response(db, user, create_test_section(db, inactive, title="Old section"))

    response = client.get("/api/stats/admin", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalUsers": 1,
        "totalAgents": 1,
        "totalProviders": 1,
        "totalResponses": 2,
        "submittedResponses": 1,
        "pendingResponses": 1,
    }


def test_agent_stats_scoped_to_provider(client, db, section, agent_headers):
    other_section = create_test_section(
        db, create_test_provider(db, provider_id="other", name="Other"), title="Elsewhere"
    )
    alice = create_test_portal_user(db)
    bob = create_test_portal_user(db)
    create_test_response(db, alice, section, submitted=True)
    create_test_response(db, bob, section)
    create_test_response(db, bob, other_section, submitted=True)

    response = client.get("/api/stats/agent", headers=agent_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalResponses": 2,
        "submittedResponses": 1,
        "pendingResponses": 1,
        "totalUsers": 2,
    }


def test_agent_stats_without_provider(client, db, auth_headers):
    agent = create_test_agent(db, None)

    response = client.get("/api/stats/agent", headers=auth_headers(agent))

    assert response.status_code == 400


def test_stats_role_checks(client, user_headers, agent_headers):
    assert client.get("/api/stats/admin", headers=agent_headers).status_code == 403
    assert client.get("/api/stats/agent", headers=user_headers).status_code == 403
