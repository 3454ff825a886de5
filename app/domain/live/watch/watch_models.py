"""Watch domain models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from app.app_config import AppEnvironConfig, get_app_environ_config


class WatchPhase(str, Enum):
    """Lifecycle of one viewer watch session.

    LOADING → NOT_FOUND | ERROR (terminal) | RESOLVED
    RESOLVED → ACTIVE_LIVE | ACTIVE_OFFLINE (registration accepted)
    any → CLOSED (identifier changed or page torn down)
    """

    LOADING = "loading"
    NOT_FOUND = "not_found"
    ERROR = "error"
    RESOLVED = "resolved"
    ACTIVE_LIVE = "active_live"
    ACTIVE_OFFLINE = "active_offline"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.value


class ResolutionStatus(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    ERROR = "error"
    RESOLVED = "resolved"


class NotFoundReason(str, Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    ABSENT = "absent"


NOT_FOUND_MESSAGES: dict[NotFoundReason, str] = {
    NotFoundReason.MISSING: "no identifier supplied",
    NotFoundReason.MALFORMED: "malformed identifier",
    NotFoundReason.ABSENT: "not present in store",
}

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while loading the stream"


class ChannelSnapshot(BaseModel):
    """Read-only view of a channel as seen at resolution time."""

    channel_id: str
    display_name: str
    description: str | None = None
    is_live: bool = False


class StreamSnapshot(BaseModel):
    stream_id: str
    channel_id: str
    is_live: bool = True
    # Raw stored value; PresenceTracker normalises it before display.
    viewer_count: Any = 0
    created_at: datetime | None = None


class ResolutionOutcome(BaseModel):
    identifier: str | None
    status: ResolutionStatus
    reason: NotFoundReason | None = None
    message: str | None = None
    channel: ChannelSnapshot | None = None
    viewer_count: int = 0

    @classmethod
    def not_found(cls, identifier: str | None, reason: NotFoundReason) -> "ResolutionOutcome":
        return cls(
            identifier=identifier,
            status=ResolutionStatus.NOT_FOUND,
            reason=reason,
            message=NOT_FOUND_MESSAGES[reason],
        )

    @classmethod
    def error(cls, identifier: str | None, message: str) -> "ResolutionOutcome":
        return cls(identifier=identifier, status=ResolutionStatus.ERROR, message=message)

    @classmethod
    def resolved(
        cls, identifier: str, channel: ChannelSnapshot, viewer_count: int = 0
    ) -> "ResolutionOutcome":
        return cls(
            identifier=identifier,
            status=ResolutionStatus.RESOLVED,
            channel=channel,
            viewer_count=viewer_count,
        )


class ChatOrigin(str, Enum):
    LOCAL = "local"
    PEER = "peer"


class ChatEntry(BaseModel):
    message_id: str
    author: str
    text: str
    origin: ChatOrigin = ChatOrigin.LOCAL
    created_at: datetime


class RegistrationRejection(str, Enum):
    MISSING_FIELDS = "missing_fields"
    INVALID_EMAIL = "invalid_email"


REJECTION_MESSAGES: dict[RegistrationRejection, str] = {
    RegistrationRejection.MISSING_FIELDS: "Please fill in all fields",
    RegistrationRejection.INVALID_EMAIL: "Please enter a valid email address",
}


class RegistrationResult(BaseModel):
    accepted: bool
    rejection: RegistrationRejection | None = None
    message: str | None = None

    @classmethod
    def accept(cls) -> "RegistrationResult":
        return cls(accepted=True)

    @classmethod
    def reject(cls, rejection: RegistrationRejection) -> "RegistrationResult":
        return cls(accepted=False, rejection=rejection, message=REJECTION_MESSAGES[rejection])


class ViewerIdentity(BaseModel):
    first_name: str
    last_name: str
    email: str


class WatchSnapshot(BaseModel):
    """Everything the watch page renders for one session, at one instant."""

    identifier: str | None
    phase: WatchPhase
    reason: NotFoundReason | None = None
    message: str | None = None
    channel: ChannelSnapshot | None = None
    viewer_count: int = 0
    registration_complete: bool = False
    chat_enabled: bool = False
    current_caption: str | None = None
    current_mood: str | None = None
    messages: list[ChatEntry] = Field(default_factory=list)


class WatchSettings(BaseModel):
    """Timer settings for one watch session, in seconds."""

    caption_interval: float = Field(default=5.0, gt=0)
    mood_interval: float = Field(default=8.0, gt=0)
    peer_chat_interval: float = Field(default=7.0, gt=0)
    peer_chat_admit_probability: float = Field(default=0.7, ge=0, le=1)
    peer_chat_enabled: bool = True
    # Open watch pages nobody touched for this long are closed
    session_idle_timeout: float = Field(default=300.0, gt=0)

    @classmethod
    def from_config(cls, settings: AppEnvironConfig | None = None) -> "WatchSettings":
        settings = settings or get_app_environ_config()
        return cls(
            caption_interval=settings.WATCH_CAPTION_INTERVAL_SECONDS,
            mood_interval=settings.WATCH_MOOD_INTERVAL_SECONDS,
            peer_chat_interval=settings.WATCH_PEER_CHAT_INTERVAL_SECONDS,
            peer_chat_admit_probability=settings.WATCH_PEER_CHAT_ADMIT_PROBABILITY,
            peer_chat_enabled=settings.WATCH_PEER_CHAT_ENABLED,
            session_idle_timeout=settings.WATCH_SESSION_IDLE_SECONDS,
        )
