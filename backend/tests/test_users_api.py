"""
Bloglist Backend — /api/users Integration Tests
================================================

What we test:
    ✅ Registration returns 201 and never echoes the password
    ✅ Each validation rule answers 400 with its message and stores nothing
    ✅ Duplicate usernames are rejected
    ✅ GET /api/users lists users with their blogs
"""

import pytest


async def _usernames(client):
    response = await client.get("/api/users")
    assert response.status_code == 200
    return [u["username"] for u in response.json()]


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_fresh_username(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "mluukkai"
        assert body["name"] == "Matti Luukkainen"
        assert body["blogs"] == []
        assert "id" in body
        assert "password" not in body
        assert "password_hash" not in body
        assert await _usernames(test_client) == ["mluukkai"]

    @pytest.mark.asyncio
    async def test_duplicate_username(self, test_client, create_user):
        await create_user()

        response = await test_client.post(
            "/api/users", json={"username": "root", "name": "Again", "password": "salainen"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "expected username to be unique"
        assert await _usernames(test_client) == ["root"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body,message",
        [
            ({"name": "x", "password": "secret"}, "username or password missing"),
            ({"username": "someone", "name": "x"}, "username or password missing"),
            ({"username": "ro", "password": "secret"}, "username must be at least 3 characters long"),
            ({"username": "someone", "password": "pw"}, "password must be at least 3 characters long"),
            ({"username": "someone", "password": "x" * 73}, "password must be at most 72 bytes long"),
            ({"username": "   ", "password": "sekret"}, "username or password missing"),
            ({"username": "u" * 65, "password": "sekret"}, "username must be at most 64 characters long"),
            (
                {"username": "someone", "name": "n" * 129, "password": "sekret"},
                "name must be at most 128 characters long",
            ),
        ],
    )
    async def test_invalid_user_not_stored(self, test_client, body, message):
        response = await test_client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == message
        assert await _usernames(test_client) == []

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "ro", "password": "secret"},
            headers={"X-Request-ID": "abc12345"},
        )
        assert response.json()["request_id"] == "abc12345"
        assert response.headers["X-Request-ID"] == "abc12345"


class TestListUsers:

    @pytest.mark.asyncio
    async def test_users_with_blogs(self, test_client, create_user, login_headers):
        await create_user()
        await create_user(username="mluukkai", password="salainen", name="Matti Luukkainen")
        headers = await login_headers()
        await test_client.post(
            "/api/blogs",
            json={"title": "First class tests", "url": "http://blog.cleancoder.com/", "likes": 10},
            headers=headers,
        )

        users = {u["username"]: u for u in (await test_client.get("/api/users")).json()}

        assert set(users) == {"root", "mluukkai"}
        assert [b["title"] for b in users["root"]["blogs"]] == ["First class tests"]
        assert users["root"]["blogs"][0]["likes"] == 10
        assert users["mluukkai"]["blogs"] == []
        assert all("password_hash" not in u for u in users.values())
