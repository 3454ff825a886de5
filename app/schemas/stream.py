"""Stream ODM schema."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator
from pymongo import DESCENDING, IndexModel

from .schema_utils import parse_mongo_datetime


class Stream(Document):
    """One broadcast of a channel.

    The active stream of a channel is the most recently created one with
    `is_live=True`.
    """

    stream_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    channel_id: str
    is_live: bool = True
    viewer_count: int = Field(default=0, ge=0)

    created_at: datetime
    ended_at: datetime | None = None

    @field_validator("created_at", "ended_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "stream"
        indexes = [
            IndexModel(
                [("channel_id", 1), ("is_live", 1), ("created_at", DESCENDING)],
                name="channel_live_latest",
            ),
        ]
