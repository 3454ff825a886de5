"""Broadcast domain models."""

from datetime import datetime

from pydantic import BaseModel


class ChannelCreateParams(BaseModel):
    """Parameters for creating a channel."""

    user_id: str
    display_name: str | None = None
    description: str | None = None


class ChannelResponse(BaseModel):
    """Channel response model."""

    channel_id: str
    user_id: str
    display_name: str
    description: str | None = None
    is_live: bool
    share_link: str
    created_at: datetime
    updated_at: datetime


class BroadcastStatus(BaseModel):
    """What the broadcaster page shows while a channel is (or is not) on air."""

    channel_id: str
    is_live: bool
    viewer_count: int = 0
    stream_id: str | None = None
    started_at: datetime | None = None
    duration_seconds: int = 0
    duration_label: str = "00:00"
    share_link: str


def format_duration(seconds: int) -> str:
    """Render elapsed seconds as MM:SS; minutes are not wrapped at 60."""
    seconds = max(int(seconds), 0)
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes:02d}:{remaining:02d}"
