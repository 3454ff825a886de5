"""Broadcaster flow: channel creation, going live and on-air status."""

from .broadcast_domain import BroadcastService
from .broadcast_models import BroadcastStatus, ChannelResponse, format_duration

__all__ = ["BroadcastService", "BroadcastStatus", "ChannelResponse", "format_duration"]
