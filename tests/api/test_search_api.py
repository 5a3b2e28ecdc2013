"""
Tests for /search/users, /users/friends and the health probes.
"""

import uuid

import pytest

from slyp.config.settings import settings
from slyp.shared.utils.security import SecurityUtils


@pytest.fixture
async def people(make_user):
    return {
        "ada": await make_user("ada@example.com", display_name="Ada"),
        "bob": await make_user("bob@example.com", display_name="Bobby Tables"),
        "bo": await make_user("bo@example.com", display_name="Bo"),
    }


@pytest.fixture
async def ada_slyp(people, make_slyp, make_user_slyp):
    return await make_user_slyp(people["ada"], await make_slyp())


async def test_search_by_fragment(client, auth_headers, people):
    response = await client.post("/search/users", json={"q": "bo"}, headers=auth_headers(people["ada"]))

    assert response.status_code == 200
    assert [user["email"] for user in response.json()] == ["bo@example.com", "bob@example.com"]


async def test_search_excludes_requester(client, auth_headers, people):
    response = await client.post("/search/users", json={"q": "ada"}, headers=auth_headers(people["ada"]))

    assert response.json() == []


async def test_search_excludes_people_already_in_the_chain(client, auth_headers, people, ada_slyp):
    headers = auth_headers(people["ada"])
    await client.post(
        "/reslyps",
        json={"emails": ["bob@example.com"], "slyp_id": str(ada_slyp.slyp_id), "comment": ""},
        headers=headers,
    )

    response = await client.post(
        "/search/users",
        json={"q": "bo", "user_slyp_id": str(ada_slyp.id)},
        headers=headers,
    )

    assert [user["email"] for user in response.json()] == ["bo@example.com"]


async def test_search_with_foreign_membership_is_404(client, auth_headers, people, ada_slyp):
    response = await client.post(
        "/search/users",
        json={"q": "bo", "user_slyp_id": str(ada_slyp.id)},
        headers=auth_headers(people["bob"]),
    )

    assert response.status_code == 404


@pytest.mark.parametrize("payload", [{"q": ""}, {}, {"q": "bo", "limit": 0}])
async def test_search_validates_body(client, auth_headers, people, payload):
    response = await client.post("/search/users", json=payload, headers=auth_headers(people["ada"]))

    assert response.status_code == 400


async def test_friends_lists_both_directions(client, auth_headers, people, ada_slyp):
    await client.post(
        "/reslyps",
        json={"emails": ["bob@example.com"], "slyp_id": str(ada_slyp.slyp_id), "comment": ""},
        headers=auth_headers(people["ada"]),
    )

    ada_friends = await client.get("/users/friends", headers=auth_headers(people["ada"]))
    bob_friends = await client.get("/users/friends", headers=auth_headers(people["bob"]))
    bo_friends = await client.get("/users/friends", headers=auth_headers(people["bo"]))

    assert [user["email"] for user in ada_friends.json()] == ["bob@example.com"]
    assert [user["email"] for user in bob_friends.json()] == ["ada@example.com"]
    assert bo_friends.json() == []


async def test_unknown_user_slyp_id_is_404(client, auth_headers, people):
    response = await client.get(f"/user_slyps/{uuid.uuid4()}", headers=auth_headers(people["ada"]))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


async def test_token_for_non_uuid_user_is_401(client):
    token = SecurityUtils.create_access_token({"user_id": "42"}, settings.SECRET_KEY)

    response = await client.get("/users/friends", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "slyp"

    async def test_ready(self, client):
        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    async def test_live(self, client):
        response = await client.get("/live")

        assert response.json() == {"status": "alive"}
