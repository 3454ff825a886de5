"""Broadcast operations."""

from datetime import datetime, timezone

from beanie.operators import Set
from loguru import logger

from app.domain.utils.clock import utc_now
from app.domain.utils.idgen import new_channel_id, new_stream_id
from app.schemas import Channel, Stream
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from ..watch.share_link import build_share_link
from .broadcast_models import BroadcastStatus, ChannelCreateParams, ChannelResponse, format_duration


def _as_utc(value: datetime) -> datetime:
    # Mongo hands back naive UTC datetimes unless the client is tz-aware.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class BroadcastOperations:
    """Channel and stream writes performed by the broadcaster."""

    def __init__(self, share_origin: str):
        self._share_origin = share_origin

    async def _get_owned_channel(self, channel_id: str, user_id: str) -> Channel:
        channel = await Channel.find_one(Channel.channel_id == channel_id)
        if not channel or channel.user_id != user_id:
            raise AppError(
                errcode=AppErrorCode.E_CHANNEL_NOT_FOUND,
                errmesg=f"Channel not found: {channel_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )
        return channel

    async def _get_live_stream(self, channel_id: str) -> Stream | None:
        streams = (
            await Stream.find(
                Stream.channel_id == channel_id,
                Stream.is_live == True,  # noqa: E712
            )
            .sort(-Stream.created_at)  # type: ignore[operator]
            .limit(1)
            .to_list()
        )
        return streams[0] if streams else None

    def _to_response(self, channel: Channel) -> ChannelResponse:
        return ChannelResponse(
            **channel.model_dump(exclude={"id"}),
            share_link=build_share_link(self._share_origin, channel.channel_id),
        )

    async def create_channel(self, params: ChannelCreateParams) -> ChannelResponse:
        display_name = (params.display_name or "").strip()
        if not display_name:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Display name is required",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        now = utc_now()
        channel = Channel(
            channel_id=new_channel_id(),
            user_id=params.user_id,
            display_name=display_name,
            description=params.description,
            created_at=now,
            updated_at=now,
        )
        logger.debug(f"Creating channel: {channel.model_dump(exclude={'id'})}")
        await channel.insert()
        return self._to_response(channel)

    async def go_live(self, channel_id: str, user_id: str) -> BroadcastStatus:
        """Open a stream for the channel. Already-live channels keep their stream."""
        channel = await self._get_owned_channel(channel_id, user_id)

        stream = await self._get_live_stream(channel_id)
        if stream is None:
            stream = Stream(
                stream_id=new_stream_id(),
                channel_id=channel_id,
                is_live=True,
                viewer_count=0,
                created_at=utc_now(),
            )
            await stream.insert()
            logger.info(f"Channel {channel_id} went live with stream {stream.stream_id}")

        if not channel.is_live:
            await channel.set({Channel.is_live: True, Channel.updated_at: utc_now()})

        return self._build_status(channel_id, stream)

    async def end_live(self, channel_id: str, user_id: str) -> BroadcastStatus:
        """End every live stream of the channel and take it offline."""
        channel = await self._get_owned_channel(channel_id, user_id)
        now = utc_now()

        await Stream.find(
            Stream.channel_id == channel_id,
            Stream.is_live == True,  # noqa: E712
        ).update_many(Set({Stream.is_live: False, Stream.ended_at: now}))

        if channel.is_live:
            await channel.set({Channel.is_live: False, Channel.updated_at: now})
            logger.info(f"Channel {channel_id} went offline")

        return self._build_status(channel_id, None)

    async def get_status(self, channel_id: str) -> BroadcastStatus:
        channel = await Channel.find_one(Channel.channel_id == channel_id)
        if not channel:
            raise AppError(
                errcode=AppErrorCode.E_CHANNEL_NOT_FOUND,
                errmesg=f"Channel not found: {channel_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )

        stream = await self._get_live_stream(channel_id) if channel.is_live else None
        return self._build_status(channel_id, stream)

    def _build_status(self, channel_id: str, stream: Stream | None) -> BroadcastStatus:
        share_link = build_share_link(self._share_origin, channel_id)
        if stream is None:
            return BroadcastStatus(channel_id=channel_id, is_live=False, share_link=share_link)

        started_at = _as_utc(stream.created_at)
        elapsed = max(int((utc_now() - started_at).total_seconds()), 0)
        return BroadcastStatus(
            channel_id=channel_id,
            is_live=True,
            viewer_count=stream.viewer_count,
            stream_id=stream.stream_id,
            started_at=started_at,
            duration_seconds=elapsed,
            duration_label=format_duration(elapsed),
            share_link=share_link,
        )
