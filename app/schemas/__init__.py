"""Beanie ODM schemas for MongoDB collections."""

from .channel import Channel
from .chat_message import ChatMessage
from .init import DOCUMENT_MODELS, init_beanie_odm
from .stream import Stream
from .viewer import Viewer

__all__ = [
    "DOCUMENT_MODELS",
    "Channel",
    "ChatMessage",
    "Stream",
    "Viewer",
    "init_beanie_odm",
]
