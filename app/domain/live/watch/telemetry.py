"""Caption and mood signals shown over the live video.

Consumers only read `current_caption` and `current_mood` through the
`TelemetryFeed` protocol. `TelemetrySimulator` cycles fixed lists on two
independent timers until a real detector replaces it.
"""

import asyncio
from collections.abc import Sequence
from typing import Generic, Protocol, TypeVar

from loguru import logger

from app.shared.task_scope import TaskScope

T = TypeVar("T")

WELCOME_CAPTION = "Welcome to my live stream! Today we are talking about AI-powered features."
INITIAL_MOOD = "Happy"

CAPTIONS: tuple[str, ...] = (
    "Let me show you how this AI mood detection works.",
    "It uses computer vision to analyze facial expressions.",
    "The speech recognition is another amazing feature we're using.",
    "Everything gets processed in real-time right in your browser.",
    "No servers needed for these AI features!",
    "What do you all think about these features?",
)

MOODS: tuple[str, ...] = ("Happy", "Neutral", "Happy", "Surprised", "Neutral")

MOOD_EMOJI = {"Happy": "😊", "Sad": "😔"}


def mood_emoji(mood: str | None) -> str:
    return MOOD_EMOJI.get(mood or "", "😐")


class CyclicSequence(Generic[T]):
    """Endless, restartable walk over a fixed non-empty list."""

    def __init__(self, items: Sequence[T]):
        if not items:
            raise ValueError("CyclicSequence needs at least one item")
        self._items = tuple(items)
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._items)

    def advance(self) -> T:
        item = self._items[self._index]
        self._index = (self._index + 1) % len(self._items)
        return item

    def reset(self) -> None:
        self._index = 0


class TelemetryFeed(Protocol):
    @property
    def current_caption(self) -> str | None: ...

    @property
    def current_mood(self) -> str | None: ...

    @property
    def running(self) -> bool: ...

    def start(self, scope: TaskScope) -> None: ...

    def stop(self) -> None: ...


class TelemetrySimulator:
    def __init__(
        self,
        *,
        caption_interval: float = 5.0,
        mood_interval: float = 8.0,
        captions: Sequence[str] = CAPTIONS,
        moods: Sequence[str] = MOODS,
    ):
        self._caption_interval = caption_interval
        self._mood_interval = mood_interval
        self._captions = CyclicSequence(captions)
        self._moods = CyclicSequence(moods)
        self._current_caption: str | None = WELCOME_CAPTION
        self._current_mood: str | None = INITIAL_MOOD
        self._tasks: list[asyncio.Task] = []

    @property
    def current_caption(self) -> str | None:
        return self._current_caption

    @property
    def current_mood(self) -> str | None:
        return self._current_mood

    @property
    def caption_index(self) -> int:
        return self._captions.index

    @property
    def mood_index(self) -> int:
        return self._moods.index

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def advance_caption(self) -> str:
        self._current_caption = self._captions.advance()
        return self._current_caption

    def advance_mood(self) -> str:
        self._current_mood = self._moods.advance()
        return self._current_mood

    def reset(self) -> None:
        self._captions.reset()
        self._moods.reset()
        self._current_caption = WELCOME_CAPTION
        self._current_mood = INITIAL_MOOD

    def start(self, scope: TaskScope) -> None:
        """Reset both cycles and schedule them on `scope`. No-op while running."""
        if self.running:
            return
        self.reset()
        self._tasks = [
            scope.every(self._caption_interval, self.advance_caption, name="telemetry-caption"),
            scope.every(self._mood_interval, self.advance_mood, name="telemetry-mood"),
        ]
        logger.debug("Telemetry simulator started")

    def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        if self._tasks:
            logger.debug("Telemetry simulator stopped")
        self._tasks = []
