"""Watch domain service - hosts viewer watch pages in the service process."""

import asyncio
import time
from collections.abc import Callable

from loguru import logger

from app.domain.utils.idgen import new_watch_session_id
from app.shared.task_scope import TaskScope
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .record_store import BeanieRecordStore, RecordStore
from .watch_models import ChatEntry, RegistrationResult, WatchSettings
from .watch_session import WatchSession

SessionFactory = Callable[[str | None], WatchSession]

# Upper bound between two idle sweeps
MAX_SWEEP_INTERVAL = 30.0


class WatchNavigator:
    """One viewer page. Holds at most one live WatchSession at a time.

    Navigating to another identifier tears the previous session down before the
    new one starts resolving. Navigations on one page run one at a time.
    """

    def __init__(
        self,
        store: RecordStore,
        settings: WatchSettings | None = None,
        *,
        session_factory: SessionFactory | None = None,
    ):
        self._store = store
        self._settings = settings or WatchSettings()
        self._session_factory = session_factory or self._default_factory
        self._current: WatchSession | None = None
        self._lock = asyncio.Lock()
        self.last_seen = time.monotonic()

    def _default_factory(self, identifier: str | None) -> WatchSession:
        return WatchSession(identifier, self._store, self._settings)

    @property
    def current(self) -> WatchSession | None:
        return self._current

    def touch(self) -> None:
        self.last_seen = time.monotonic()

    def idle_for(self, now: float | None = None) -> float:
        return (now if now is not None else time.monotonic()) - self.last_seen

    async def navigate(self, identifier: str | None) -> WatchSession:
        async with self._lock:
            previous = self._current
            if previous is not None:
                await previous.close()

            session = self._session_factory(identifier)
            self._current = session
            session.start()
            return session

    async def close(self) -> None:
        async with self._lock:
            if self._current is not None:
                await self._current.close()


class WatchService:
    """Registry of open watch pages keyed by `ws_` ids.

    Pages that see no call for `session_idle_timeout` seconds are closed by a
    background sweep. The sweep starts with the first opened page and stops
    once an explicit close leaves no page open.
    """

    def __init__(self, store: RecordStore | None = None, settings: WatchSettings | None = None):
        self._store = store or BeanieRecordStore()
        self._settings = settings or WatchSettings.from_config()
        self._navigators: dict[str, WatchNavigator] = {}
        self._sweep_scope: TaskScope | None = None

    @property
    def open_count(self) -> int:
        return len(self._navigators)

    @property
    def sweeping(self) -> bool:
        return self._sweep_scope is not None and self._sweep_scope.recurring_count > 0

    def _get_navigator(self, watch_session_id: str) -> WatchNavigator:
        navigator = self._navigators.get(watch_session_id)
        if navigator is None:
            raise AppError(
                errcode=AppErrorCode.E_WATCH_SESSION_NOT_FOUND,
                errmesg=f"Watch session not found: {watch_session_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )
        navigator.touch()
        return navigator

    def get_session(self, watch_session_id: str) -> WatchSession:
        session = self._get_navigator(watch_session_id).current
        if session is None:
            raise AppError(
                errcode=AppErrorCode.E_WATCH_SESSION_NOT_FOUND,
                errmesg=f"Watch session has no channel open: {watch_session_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )
        return session

    async def open(
        self, identifier: str | None, *, wait_resolved: bool = True
    ) -> tuple[str, WatchSession]:
        watch_session_id = new_watch_session_id()
        navigator = WatchNavigator(self._store, self._settings)
        self._navigators[watch_session_id] = navigator
        self._start_sweep()

        session = await navigator.navigate(identifier)
        logger.info(f"Opened watch session {watch_session_id} for {identifier!r}")
        if wait_resolved:
            await session.wait_resolved()
        return watch_session_id, session

    async def navigate(
        self, watch_session_id: str, identifier: str | None, *, wait_resolved: bool = True
    ) -> WatchSession:
        navigator = self._get_navigator(watch_session_id)
        session = await navigator.navigate(identifier)
        if wait_resolved:
            await session.wait_resolved()
        return session

    def register(
        self, watch_session_id: str, first_name: str, last_name: str, email: str
    ) -> tuple[RegistrationResult, WatchSession]:
        session = self.get_session(watch_session_id)
        return session.register(first_name, last_name, email), session

    def send_message(self, watch_session_id: str, text: str) -> ChatEntry | None:
        return self.get_session(watch_session_id).send_message(text)

    async def close(self, watch_session_id: str) -> None:
        navigator = self._navigators.pop(watch_session_id, None)
        if navigator is None:
            raise AppError(
                errcode=AppErrorCode.E_WATCH_SESSION_NOT_FOUND,
                errmesg=f"Watch session not found: {watch_session_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )
        await navigator.close()
        logger.info(f"Closed watch session {watch_session_id}")
        if not self._navigators:
            await self._stop_sweep()

    async def close_all(self) -> None:
        await self._stop_sweep()
        navigators = list(self._navigators.values())
        self._navigators.clear()
        for navigator in navigators:
            await navigator.close()
        if navigators:
            logger.info(f"Closed {len(navigators)} watch session(s)")

    # ==================== IDLE EXPIRY ====================

    def _start_sweep(self) -> None:
        if self._sweep_scope is not None:
            return
        timeout = self._settings.session_idle_timeout
        self._sweep_scope = TaskScope("watch-idle-sweep")
        self._sweep_scope.every(
            min(timeout / 2, MAX_SWEEP_INTERVAL), self.expire_idle, name="expire-idle"
        )

    async def _stop_sweep(self) -> None:
        scope, self._sweep_scope = self._sweep_scope, None
        if scope is not None:
            await scope.aclose()

    async def expire_idle(self) -> list[str]:
        """Close every page idle for longer than the configured timeout."""
        now = time.monotonic()
        timeout = self._settings.session_idle_timeout
        expired = [
            watch_session_id
            for watch_session_id, navigator in self._navigators.items()
            if navigator.idle_for(now) > timeout
        ]
        for watch_session_id in expired:
            navigator = self._navigators.pop(watch_session_id, None)
            if navigator is None:
                continue
            await navigator.close()
            logger.info(f"Expired idle watch session {watch_session_id}")
        return expired
