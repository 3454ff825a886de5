"""Tests for the broadcaster auth context."""

import orjson
import pytest

from app.domain.auth import AuthContext, AuthUser, DemoAuthProvider, SessionStorage
from app.utils.app_errors import AppError, AppErrorCode


@pytest.fixture
def storage(tmp_path) -> SessionStorage:
    return SessionStorage(tmp_path / "stream_user.json")


@pytest.fixture
def auth(storage) -> AuthContext:
    context = AuthContext(DemoAuthProvider(), storage)
    context.initialize()
    return context


class TestInitialize:
    def test_loading_until_initialized(self, storage):
        context = AuthContext(DemoAuthProvider(), storage)

        assert context.is_loading is True
        assert context.initialize() is None
        assert context.is_loading is False

    def test_restores_saved_user(self, storage):
        storage.save(
            {"user_id": "u_1", "email": "a@b.co", "channel_name": "A", "is_live": False}
        )
        context = AuthContext(DemoAuthProvider(), storage)

        user = context.initialize()

        assert user == AuthUser(user_id="u_1", email="a@b.co", channel_name="A")

    def test_corrupt_file_is_cleared(self, storage):
        storage.path.write_bytes(b"{not json")
        context = AuthContext(DemoAuthProvider(), storage)

        assert context.initialize() is None
        assert not storage.path.exists()

    def test_invalid_shape_is_cleared(self, storage):
        storage.path.write_bytes(orjson.dumps({"email": "a@b.co"}))
        context = AuthContext(DemoAuthProvider(), storage)

        assert context.initialize() is None
        assert not storage.path.exists()


class TestLoginSignup:
    async def test_login_derives_channel_name(self, auth, storage):
        user = await auth.login("jane@example.com", "secret")

        assert user.email == "jane@example.com"
        assert user.channel_name == "jane's Channel"
        assert user.is_live is False
        assert user.user_id.startswith("u_")
        assert auth.user == user
        assert orjson.loads(storage.path.read_bytes())["user_id"] == user.user_id

    async def test_signup_uses_given_channel_name(self, auth):
        user = await auth.signup("jane@example.com", "secret", "Jane Live")

        assert user.channel_name == "Jane Live"

    async def test_signup_blank_channel_name_falls_back(self, auth):
        user = await auth.signup("jane@example.com", "secret", "  ")

        assert user.channel_name == "jane's Channel"

    @pytest.mark.parametrize(("email", "password"), [("", "secret"), ("jane@example.com", "")])
    async def test_missing_credentials(self, auth, email, password):
        with pytest.raises(AppError) as exc_info:
            await auth.login(email, password)

        assert exc_info.value.errcode == AppErrorCode.E_BAD_CREDENTIALS
        assert exc_info.value.status_code == 401
        assert auth.user is None
        assert auth.is_loading is False


class TestLogoutAndRequireUser:
    async def test_logout_clears_storage(self, auth, storage):
        await auth.login("jane@example.com", "secret")

        auth.logout()

        assert auth.user is None
        assert not storage.path.exists()

    def test_require_user_when_signed_out(self, auth):
        with pytest.raises(AppError) as exc_info:
            auth.require_user()

        assert exc_info.value.errcode == AppErrorCode.E_UNAUTHENTICATED

    async def test_set_live_is_persisted(self, auth, storage):
        await auth.login("jane@example.com", "secret")

        auth.set_live(True)

        assert auth.require_user().is_live is True
        assert orjson.loads(storage.path.read_bytes())["is_live"] is True
