"""Tests for authentication endpoints and CORS."""

import asyncio
import time

import pytest
from httpx import AsyncClient

from timetracker.core.security import verify_password
from timetracker.services import auth as auth_service_module
from tests.factories import ALLOWED_ORIGIN


class TestLogin:
    """POST /api/auth/login."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username, password, role",
        [("admin", "password123", "ADMIN"), ("client", "client123", "CLIENT")],
    )
    async def test_login_success(
        self, unauthenticated_client: AsyncClient, username: str, password: str, role: str
    ) -> None:
        response = await unauthenticated_client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )

        assert response.status_code == 200
        assert response.json() == {"username": username, "role": role}

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.post(
            "/api/auth/login", json={"username": "admin", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_user_same_response(
        self, unauthenticated_client: AsyncClient
    ) -> None:
        unknown = await unauthenticated_client.post(
            "/api/auth/login", json={"username": "nouser", "password": "x"}
        )
        wrong = await unauthenticated_client.post(
            "/api/auth/login", json={"username": "admin", "password": "x"}
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    @pytest.mark.asyncio
    async def test_login_does_not_challenge(self, unauthenticated_client: AsyncClient) -> None:
        """The login form must not trigger the browser's Basic Auth dialog."""
        response = await unauthenticated_client.post(
            "/api/auth/login", json={"username": "admin", "password": "wrong"}
        )

        assert "www-authenticate" not in response.headers

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.post("/api/auth/login", json={"username": "admin"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestMe:
    """GET /api/auth/me."""

    @pytest.mark.asyncio
    async def test_me_admin(self, admin_client: AsyncClient) -> None:
        response = await admin_client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json() == {"username": "admin", "role": "ADMIN"}

    @pytest.mark.asyncio
    async def test_me_client(self, client_client: AsyncClient) -> None:
        response = await client_client.get("/api/auth/me")

        assert response.json() == {"username": "client", "role": "CLIENT"}

    @pytest.mark.asyncio
    async def test_me_unauthenticated(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Basic"

    @pytest.mark.asyncio
    async def test_me_bad_credentials(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.get("/api/auth/me", auth=("client", "password123"))

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"


class TestCORS:
    """Cross-origin access for the browser frontend."""

    @pytest.mark.asyncio
    async def test_preflight_from_allowed_origin(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.options(
            "/api/sessions/start",
            headers={
                "Origin": ALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"
        assert "POST" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_authorization_header_exposed(self, admin_client: AsyncClient) -> None:
        response = await admin_client.get("/api/auth/me", headers={"Origin": ALLOWED_ORIGIN})

        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert "authorization" in response.headers["access-control-expose-headers"].lower()

    @pytest.mark.asyncio
    async def test_unknown_origin_not_allowed(self, admin_client: AsyncClient) -> None:
        response = await admin_client.get(
            "/api/auth/me", headers={"Origin": "https://evil.example"}
        )

        assert "access-control-allow-origin" not in response.headers


class TestBasicAuthConcurrency:
    """Password checks must not stall other work on the event loop."""

    @pytest.mark.asyncio
    async def test_concurrent_requests_keep_loop_responsive(
        self, admin_client: AsyncClient, monkeypatch
    ) -> None:
        def slow_verify(plain_password: str, hashed_password: str) -> bool:
            time.sleep(0.15)
            return verify_password(plain_password, hashed_password)

        monkeypatch.setattr(auth_service_module, "verify_password", slow_verify)

        ticks = 0
        done = asyncio.Event()

        async def ticker() -> None:
            nonlocal ticks
            while not done.is_set():
                ticks += 1
                await asyncio.sleep(0.005)

        ticker_task = asyncio.create_task(ticker())
        try:
            responses = await asyncio.gather(
                *(admin_client.get("/api/auth/me") for _ in range(3))
            )
        finally:
            done.set()
            await ticker_task

        assert [r.status_code for r in responses] == [200, 200, 200]
        # Blocking checks would let the ticker run only between requests
        assert ticks >= 10
