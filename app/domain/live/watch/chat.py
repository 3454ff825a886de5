"""Chat log for one watch session.

`ChatPipeline.append` is the only writer of the log. Local sends and the
simulated peer feed both go through it, so the peer feed can be removed
without touching the send contract.
"""

import random
from collections.abc import Sequence

from loguru import logger

from app.domain.utils.clock import utc_now
from app.domain.utils.idgen import new_message_id
from app.shared.task_scope import TaskScope

from .record_store import RecordStore
from .watch_models import ChatEntry, ChatOrigin

PEER_PRESET_MESSAGES: tuple[tuple[str, str], ...] = (
    ("John", "This is amazing technology!"),
    ("Emma", "How long did it take you to build this?"),
    ("Alex", "The captions are working really well"),
    ("Sophia", "Are you using TensorFlow.js for the mood detection?"),
    ("Michael", "Can you explain how the WebRTC setup works?"),
)


class ChatPipeline:
    def __init__(self, store: RecordStore, channel_id: str | None, scope: TaskScope):
        self._store = store
        self._channel_id = channel_id
        self._scope = scope
        self._messages: list[ChatEntry] = []

    def bind_channel(self, channel_id: str) -> None:
        self._channel_id = channel_id

    @property
    def messages(self) -> tuple[ChatEntry, ...]:
        return tuple(self._messages)

    def append(self, author: str, text: str, origin: ChatOrigin = ChatOrigin.LOCAL) -> ChatEntry:
        entry = ChatEntry(
            message_id=new_message_id(),
            author=author,
            text=text,
            origin=origin,
            created_at=utc_now(),
        )
        self._messages.append(entry)
        return entry

    def send(self, author: str, text: str) -> ChatEntry | None:
        """Append a viewer message now and store it in the background.

        Blank text is ignored. Storage problems are logged only; the local log
        is what the viewer sees.
        """
        if not text or not text.strip():
            return None

        entry = self.append(author, text)
        if not self._scope.closed:
            self._scope.spawn(self._persist(entry), name=f"chat-persist:{entry.message_id}")
        return entry

    async def _persist(self, entry: ChatEntry) -> None:
        if not self._channel_id:
            logger.info(f"No resolved channel, message {entry.message_id} kept locally")
            return
        try:
            stream = await self._store.get_latest_active_stream(self._channel_id)
            if stream is None:
                logger.info(
                    f"No active stream for channel {self._channel_id}, "
                    f"message {entry.message_id} kept locally"
                )
                return
            await self._store.insert_chat_message(stream.stream_id, entry.text, author=entry.author)
        except Exception as e:
            logger.warning(f"Failed to store chat message {entry.message_id}: {e}")


class SimulatedPeerChat:
    """Stand-in for other viewers: replays preset messages on a timer.

    Each tick is admitted with probability `admit_probability`; the preset index
    only moves on admitted ticks.
    """

    def __init__(
        self,
        pipeline: ChatPipeline,
        *,
        admit_probability: float = 0.7,
        presets: Sequence[tuple[str, str]] = PEER_PRESET_MESSAGES,
        rng: random.Random | None = None,
    ):
        self._pipeline = pipeline
        self._admit_probability = admit_probability
        self._presets = tuple(presets)
        self._rng = rng or random.Random()
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def tick(self) -> ChatEntry | None:
        if not self._presets:
            return None
        if self._rng.random() >= self._admit_probability:
            return None

        author, text = self._presets[self._index % len(self._presets)]
        self._index += 1
        return self._pipeline.append(author, text, ChatOrigin.PEER)
