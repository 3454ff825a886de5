"""Unit tests for auth and broadcast router endpoints (no database)."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.errors import app_error_handler
from app.api.v1.routers.auth import router as auth_router
from app.api.v1.routers.broadcast import router as broadcast_router
from app.domain.auth import AuthContext, DemoAuthProvider, SessionStorage
from app.domain.live.broadcast import BroadcastService
from app.utils.app_errors import AppError


@pytest.fixture
def auth_context(tmp_path) -> AuthContext:
    context = AuthContext(DemoAuthProvider(), SessionStorage(tmp_path / "user.json"))
    context.initialize()
    return context


@pytest.fixture
def test_app(auth_context: AuthContext) -> FastAPI:
    """Create FastAPI test app with routers and error handler."""
    app = FastAPI()
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.include_router(auth_router)
    app.include_router(broadcast_router)
    app.state.auth_context = auth_context
    app.state.broadcast_service = BroadcastService(share_origin="https://live.example.com")
    return app


@pytest_asyncio.fixture
async def client(test_app: FastAPI):
    """Create async HTTP client for testing."""
    transport = ASGITransport(app=test_app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestAuthRoutes:
    async def test_me_when_signed_out(self, client):
        response = await client.get("/auth/me")

        assert response.status_code == 200
        assert response.json()["results"] == {"user": None, "is_loading": False}

    async def test_login_and_me(self, client):
        response = await client.post(
            "/auth/login", json={"email": "jane@example.com", "password": "secret"}
        )

        assert response.status_code == 200
        user = response.json()["results"]
        assert user["channel_name"] == "jane's Channel"

        response = await client.get("/auth/me")
        assert response.json()["results"]["user"]["user_id"] == user["user_id"]

    async def test_signup(self, client):
        response = await client.post(
            "/auth/signup",
            json={"email": "jane@example.com", "password": "secret", "channel_name": "Jane TV"},
        )

        assert response.status_code == 200
        assert response.json()["results"]["channel_name"] == "Jane TV"

    async def test_bad_credentials(self, client):
        response = await client.post("/auth/login", json={"email": "", "password": ""})

        assert response.status_code == 401
        assert response.json()["errcode"] == "E_BAD_CREDENTIALS"

    async def test_logout(self, client, auth_context):
        await client.post("/auth/login", json={"email": "jane@example.com", "password": "secret"})

        response = await client.post("/auth/logout")

        assert response.status_code == 200
        assert auth_context.user is None


class TestBroadcastRequiresLogin:
    @pytest.mark.parametrize(
        ("path", "body"),
        [
            ("/broadcast/create_channel", {"display_name": "Jane TV"}),
            ("/broadcast/go_live", {"channel_id": "123e4567-e89b-12d3-a456-426614174000"}),
            ("/broadcast/end_live", {"channel_id": "123e4567-e89b-12d3-a456-426614174000"}),
        ],
    )
    async def test_signed_out_is_unauthorized(self, client, path, body):
        response = await client.post(path, json=body)

        assert response.status_code == 401
        assert response.json()["errcode"] == "E_UNAUTHENTICATED"
