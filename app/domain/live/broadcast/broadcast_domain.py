"""Broadcast domain service - channel creation and going on/off air."""

from app.app_config import get_app_environ_config

from ..watch.share_link import build_share_link
from ._broadcasts import BroadcastOperations
from .broadcast_models import BroadcastStatus, ChannelCreateParams, ChannelResponse


class BroadcastService:
    """Broadcaster-facing service."""

    def __init__(self, share_origin: str | None = None):
        self._share_origin = share_origin or get_app_environ_config().FRONTEND_BASE_URL
        self._broadcasts = BroadcastOperations(self._share_origin)

    # ==================== CHANNELS ====================

    async def create_channel(
        self,
        user_id: str,
        display_name: str | None,
        description: str | None = None,
    ) -> ChannelResponse:
        """Create a channel owned by the given user.

        Raises AppError if the display name is blank.
        """
        return await self._broadcasts.create_channel(
            ChannelCreateParams(
                user_id=user_id,
                display_name=display_name,
                description=description,
            )
        )

    def share_link(self, channel_id: str) -> str:
        return build_share_link(self._share_origin, channel_id)

    # ==================== ON AIR ====================

    async def go_live(self, channel_id: str, user_id: str) -> BroadcastStatus:
        """Raises AppError if the channel is not found or not owned by the user."""
        return await self._broadcasts.go_live(channel_id, user_id)

    async def end_live(self, channel_id: str, user_id: str) -> BroadcastStatus:
        """Raises AppError if the channel is not found or not owned by the user."""
        return await self._broadcasts.end_live(channel_id, user_id)

    async def get_status(self, channel_id: str) -> BroadcastStatus:
        return await self._broadcasts.get_status(channel_id)
