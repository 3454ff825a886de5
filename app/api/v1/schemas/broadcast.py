from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from .base import as_optional_utc_iso, as_utc_iso


class CreateChannelIn(BaseModel):
    display_name: str | None = Field(
        default=None, description="Channel name; defaults to the signed-in user's channel name"
    )
    description: str | None = Field(default=None, description="Description of the channel")


class CreateChannelOut(BaseModel):
    channel_id: str = Field(description="Unique identifier for the created channel")
    display_name: str
    share_link: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str:
        return as_utc_iso(dt)


class ChannelActionIn(BaseModel):
    channel_id: str


class BroadcastStatusOut(BaseModel):
    channel_id: str
    is_live: bool
    viewer_count: int
    stream_id: str | None = None
    started_at: datetime | None = None
    duration_seconds: int
    duration_label: str
    share_link: str

    @field_serializer("started_at")
    def serialize_started_at(self, dt: datetime | None) -> str | None:
        return as_optional_utc_iso(dt)
