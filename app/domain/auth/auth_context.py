"""Auth context - the current broadcaster and its persisted session."""

from loguru import logger
from pydantic import ValidationError

from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .auth_models import AuthUser
from .auth_provider import AuthProvider
from .session_storage import SessionStorage


class AuthContext:
    """Holds at most one signed-in user for the process.

    `initialize()` restores the user saved by a previous login; `logout()`
    forgets it on disk as well.
    """

    def __init__(self, provider: AuthProvider, storage: SessionStorage):
        self._provider = provider
        self._storage = storage
        self._user: AuthUser | None = None
        self._is_loading = True

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def initialize(self) -> AuthUser | None:
        data = self._storage.load()
        if data is not None:
            try:
                self._user = AuthUser.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Stored auth session is invalid, clearing it: {e}")
                self._storage.clear()
                self._user = None
        self._is_loading = False
        return self._user

    async def login(self, email: str, password: str) -> AuthUser:
        self._is_loading = True
        try:
            user = await self._provider.login(email, password)
        finally:
            self._is_loading = False
        self._set_user(user)
        logger.info(f"User {user.user_id} logged in")
        return user

    async def signup(self, email: str, password: str, channel_name: str) -> AuthUser:
        self._is_loading = True
        try:
            user = await self._provider.signup(email, password, channel_name)
        finally:
            self._is_loading = False
        self._set_user(user)
        logger.info(f"User {user.user_id} signed up")
        return user

    def logout(self) -> None:
        if self._user is not None:
            logger.info(f"User {self._user.user_id} logged out")
        self._user = None
        self._storage.clear()

    def set_live(self, is_live: bool) -> None:
        if self._user is not None and self._user.is_live != is_live:
            self._set_user(self._user.model_copy(update={"is_live": is_live}))

    def require_user(self) -> AuthUser:
        """
        Raises:
            AppError: E_UNAUTHENTICATED when nobody is signed in
        """
        if self._user is None:
            raise AppError(
                errcode=AppErrorCode.E_UNAUTHENTICATED,
                errmesg="Login required",
                status_code=HttpStatusCode.UNAUTHORIZED,
            )
        return self._user

    def _set_user(self, user: AuthUser) -> None:
        self._user = user
        self._storage.save(user.model_dump(mode="json"))
