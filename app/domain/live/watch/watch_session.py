"""One viewer's interaction with one channel, from resolution to teardown."""

import asyncio
import random

from loguru import logger

from app.shared.task_scope import TaskScope
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .chat import ChatPipeline, SimulatedPeerChat
from .presence import PresenceTracker
from .record_store import RecordStore
from .registration import RegistrationGate
from .resolver import ChannelResolver
from .telemetry import TelemetryFeed, TelemetrySimulator
from .watch_models import (
    UNEXPECTED_ERROR_MESSAGE,
    ChannelSnapshot,
    ChatEntry,
    RegistrationResult,
    ResolutionOutcome,
    ResolutionStatus,
    WatchPhase,
    WatchSettings,
    WatchSnapshot,
)
from .watch_state_machine import WatchStateMachine

_OUTCOME_PHASES = {
    ResolutionStatus.NOT_FOUND: WatchPhase.NOT_FOUND,
    ResolutionStatus.ERROR: WatchPhase.ERROR,
    ResolutionStatus.RESOLVED: WatchPhase.RESOLVED,
}


class WatchSession:
    """Session state for a single watch identifier.

    All timers and in-flight store calls of the session live in one TaskScope;
    `close()` cancels them together and nothing mutates the session afterwards.
    """

    def __init__(
        self,
        identifier: str | None,
        store: RecordStore,
        settings: WatchSettings | None = None,
        *,
        telemetry: TelemetryFeed | None = None,
        rng: random.Random | None = None,
    ):
        self.identifier = identifier
        self._settings = settings or WatchSettings()
        self._scope = TaskScope(f"watch:{identifier}")
        self._phase = WatchPhase.LOADING
        self._outcome: ResolutionOutcome | None = None
        self._resolution_task: asyncio.Task | None = None

        self._resolver = ChannelResolver(store)
        self._presence = PresenceTracker()
        self._gate = RegistrationGate(store)
        self._chat = ChatPipeline(store, None, self._scope)
        self._telemetry: TelemetryFeed = telemetry or TelemetrySimulator(
            caption_interval=self._settings.caption_interval,
            mood_interval=self._settings.mood_interval,
        )
        self._peer_chat = SimulatedPeerChat(
            self._chat,
            admit_probability=self._settings.peer_chat_admit_probability,
            rng=rng,
        )

    # ==================== STATE ====================

    @property
    def phase(self) -> WatchPhase:
        return self._phase

    @property
    def outcome(self) -> ResolutionOutcome | None:
        return self._outcome

    @property
    def channel(self) -> ChannelSnapshot | None:
        return self._outcome.channel if self._outcome else None

    @property
    def scope(self) -> TaskScope:
        return self._scope

    @property
    def telemetry(self) -> TelemetryFeed:
        return self._telemetry

    @property
    def peer_chat(self) -> SimulatedPeerChat:
        return self._peer_chat

    @property
    def viewer_count(self) -> int:
        return self._presence.current_count()

    @property
    def registration_complete(self) -> bool:
        return self._gate.complete

    @property
    def chat_enabled(self) -> bool:
        channel = self.channel
        return (
            self._phase == WatchPhase.ACTIVE_LIVE
            and self._gate.complete
            and channel is not None
            and channel.is_live
        )

    @property
    def messages(self) -> tuple[ChatEntry, ...]:
        return self._chat.messages

    def snapshot(self) -> WatchSnapshot:
        outcome = self._outcome
        live = self._phase == WatchPhase.ACTIVE_LIVE
        return WatchSnapshot(
            identifier=self.identifier,
            phase=self._phase,
            reason=outcome.reason if outcome else None,
            message=outcome.message if outcome else None,
            channel=self.channel,
            viewer_count=self.viewer_count,
            registration_complete=self.registration_complete,
            chat_enabled=self.chat_enabled,
            current_caption=self._telemetry.current_caption if live else None,
            current_mood=self._telemetry.current_mood if live else None,
            messages=list(self._chat.messages),
        )

    def _transition(self, new_phase: WatchPhase) -> None:
        if not WatchStateMachine.can_transition(self._phase, new_phase):
            raise AppError(
                errcode=AppErrorCode.E_INVALID_STATE,
                errmesg=f"Invalid watch transition: {self._phase} -> {new_phase}",
                status_code=HttpStatusCode.CONFLICT,
            )
        logger.info(f"Watch session {self.identifier}: {self._phase} -> {new_phase}")
        self._phase = new_phase

    # ==================== RESOLUTION ====================

    def start(self) -> asyncio.Task:
        """Begin resolving the identifier in the background. Idempotent."""
        if self._resolution_task is None:
            self._resolution_task = self._scope.spawn(self._run_resolution(), name="resolve")
        return self._resolution_task

    async def _run_resolution(self) -> None:
        try:
            outcome = await self._resolver.resolve(self.identifier)
        except Exception as e:
            logger.exception(f"Resolution crashed for {self.identifier}: {e}")
            outcome = ResolutionOutcome.error(self.identifier, UNEXPECTED_ERROR_MESSAGE)
        self.apply_outcome(outcome)

    def apply_outcome(self, outcome: ResolutionOutcome) -> bool:
        """Commit a resolution outcome unless it is stale.

        An outcome is stale when it was produced for another identifier or
        arrives after the session left LOADING (including after close).
        """
        if self._phase != WatchPhase.LOADING or outcome.identifier != self.identifier:
            logger.info(
                f"Discarding stale resolution for {outcome.identifier!r} "
                f"(session {self.identifier!r} is {self._phase})"
            )
            return False

        self._outcome = outcome
        if outcome.status == ResolutionStatus.RESOLVED:
            self._presence.update(outcome.viewer_count)
            if outcome.channel is not None:
                self._chat.bind_channel(outcome.channel.channel_id)
        self._transition(_OUTCOME_PHASES[outcome.status])
        return True

    async def wait_resolved(self) -> WatchSnapshot:
        """Wait for the resolution to settle and return the resulting snapshot."""
        task = self.start() if self._phase == WatchPhase.LOADING else self._resolution_task
        if task is not None and not task.done():
            await asyncio.wait({task})
        return self.snapshot()

    # ==================== REGISTRATION ====================

    def register(self, first_name: str, last_name: str, email: str) -> RegistrationResult:
        """Submit the registration form.

        Raises:
            AppError: E_INVALID_STATE when the channel has not been resolved
        """
        if WatchStateMachine.is_active(self._phase):
            return self._gate.submit(first_name, last_name, email)

        if self._phase != WatchPhase.RESOLVED:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_STATE,
                errmesg=f"Cannot register while watch session is {self._phase}",
                status_code=HttpStatusCode.CONFLICT,
            )

        result = self._gate.submit(first_name, last_name, email)
        if not result.accepted:
            logger.debug(f"Registration rejected for {self.identifier}: {result.rejection}")
            return result

        channel = self.channel
        assert channel is not None
        self._scope.spawn(self._gate.persist_viewer(channel.channel_id), name="viewer-persist")
        self._activate(channel)
        return result

    def _activate(self, channel: ChannelSnapshot) -> None:
        if not channel.is_live:
            self._transition(WatchPhase.ACTIVE_OFFLINE)
            return

        self._transition(WatchPhase.ACTIVE_LIVE)
        self._telemetry.start(self._scope)
        if self._settings.peer_chat_enabled:
            self._scope.every(
                self._settings.peer_chat_interval, self._peer_chat.tick, name="peer-chat"
            )

    # ==================== CHAT ====================

    def send_message(self, text: str) -> ChatEntry | None:
        """Send a chat message as the registered viewer.

        Returns None for blank text.

        Raises:
            AppError: E_CHAT_DISABLED unless registered on a live channel
        """
        if not self.chat_enabled:
            raise AppError(
                errcode=AppErrorCode.E_CHAT_DISABLED,
                errmesg="Chat is available once registered on a live stream",
                status_code=HttpStatusCode.CONFLICT,
            )

        viewer = self._gate.viewer
        assert viewer is not None
        return self._chat.send(viewer.first_name, text)

    # ==================== TEARDOWN ====================

    async def close(self) -> None:
        """Stop every timer and in-flight call of this session. Idempotent."""
        if self._phase == WatchPhase.CLOSED:
            return

        self._telemetry.stop()
        self._transition(WatchPhase.CLOSED)
        await self._scope.aclose()
