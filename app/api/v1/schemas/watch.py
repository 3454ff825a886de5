from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from app.domain.live.watch.telemetry import mood_emoji
from app.domain.live.watch.watch_models import ChatEntry, WatchSnapshot

from .base import as_utc_iso


class OpenWatchIn(BaseModel):
    channel_id: str | None = Field(default=None, description="Channel identifier from the watch URL")


class NavigateWatchIn(BaseModel):
    watch_session_id: str = Field(description="Watch session returned by /watch/open")
    channel_id: str | None = Field(default=None, description="New channel identifier")


class WatchSessionIn(BaseModel):
    watch_session_id: str = Field(description="Watch session returned by /watch/open")


class RegisterViewerIn(BaseModel):
    watch_session_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class SendMessageIn(BaseModel):
    watch_session_id: str
    text: str = Field(default="", max_length=2000)


class ChannelOut(BaseModel):
    channel_id: str
    display_name: str
    description: str | None = None
    is_live: bool


class ChatEntryOut(BaseModel):
    message_id: str
    author: str
    text: str
    origin: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str:
        return as_utc_iso(dt)

    @classmethod
    def from_entry(cls, entry: ChatEntry) -> "ChatEntryOut":
        return cls(
            message_id=entry.message_id,
            author=entry.author,
            text=entry.text,
            origin=entry.origin.value,
            created_at=entry.created_at,
        )


class WatchSnapshotOut(BaseModel):
    channel_id: str | None = None
    phase: str
    reason: str | None = None
    message: str | None = None
    channel: ChannelOut | None = None
    viewer_count: int = 0
    registration_complete: bool = False
    chat_enabled: bool = False
    current_caption: str | None = None
    current_mood: str | None = None
    current_mood_emoji: str | None = None
    messages: list[ChatEntryOut] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: WatchSnapshot) -> "WatchSnapshotOut":
        channel = snapshot.channel
        return cls(
            channel_id=snapshot.identifier,
            phase=snapshot.phase.value,
            reason=snapshot.reason.value if snapshot.reason else None,
            message=snapshot.message,
            channel=ChannelOut(**channel.model_dump()) if channel else None,
            viewer_count=snapshot.viewer_count,
            registration_complete=snapshot.registration_complete,
            chat_enabled=snapshot.chat_enabled,
            current_caption=snapshot.current_caption,
            current_mood=snapshot.current_mood,
            current_mood_emoji=mood_emoji(snapshot.current_mood) if snapshot.current_mood else None,
            messages=[ChatEntryOut.from_entry(m) for m in snapshot.messages],
        )


class OpenWatchOut(BaseModel):
    watch_session_id: str
    snapshot: WatchSnapshotOut


class RegisterViewerOut(BaseModel):
    accepted: bool
    rejection: str | None = None
    message: str | None = None
    snapshot: WatchSnapshotOut


class SendMessageOut(BaseModel):
    sent: bool
    message: ChatEntryOut | None = None


class ShareLinkOut(BaseModel):
    channel_id: str
    share_link: str
