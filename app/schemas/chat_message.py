"""Chat message ODM schema."""

from datetime import datetime

from beanie import Document, Indexed


class ChatMessage(Document):
    message_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    stream_id: Indexed(str)  # type: ignore[valid-type]
    author: str | None = None
    text: str
    created_at: datetime

    class Settings:
        name = "chat_message"
