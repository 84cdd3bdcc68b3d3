"""
Bloglist Backend — Login, Token & Health Integration Tests
===========================================================
"""

import pytest
from sqlalchemy import select

from bloglist.models import User


class TestLogin:

    @pytest.mark.asyncio
    async def test_valid_credentials(self, test_client, create_user):
        await create_user()

        response = await test_client.post(
            "/api/login", json={"username": "root", "password": "sekret"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "root"
        assert body["name"] == "Superuser"
        assert body["token"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client, create_user):
        await create_user()

        response = await test_client.post(
            "/api/login", json={"username": "root", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid username or password"
        assert "token" not in response.json()

    @pytest.mark.asyncio
    async def test_unknown_username(self, test_client):
        response = await test_client.post(
            "/api/login", json={"username": "nobody", "password": "sekret"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "invalid username or password"

    @pytest.mark.asyncio
    async def test_token_authorizes_blog_creation(self, test_client, create_user, login_headers):
        await create_user()
        headers = await login_headers()

        response = await test_client.post(
            "/api/blogs",
            json={"title": "Type wars", "url": "http://blog.cleancoder.com/uncle-bob/2016/05/01/TypeWars.html"},
            headers=headers,
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_token_of_deleted_user(self, test_client, database, create_user, login_headers):
        await create_user()
        headers = await login_headers()

        async with database.session() as session:
            result = await session.execute(select(User).where(User.username == "root"))
            await session.delete(result.scalar_one())
            await session.commit()

        response = await test_client.post(
            "/api/blogs", json={"title": "t", "url": "http://example.com"}, headers=headers
        )
        assert response.status_code == 401
        assert response.json()["error"] == "user not found"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "X-Request-ID" in response.headers
