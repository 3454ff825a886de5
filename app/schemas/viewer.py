"""Viewer ODM schema."""

from datetime import datetime

from beanie import Document, Indexed


class Viewer(Document):
    """Viewer registration captured by the watch page. Written once, never updated."""

    viewer_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    stream_id: Indexed(str)  # type: ignore[valid-type]
    first_name: str
    last_name: str
    email: str
    created_at: datetime

    class Settings:
        name = "viewer"
