"""Channel resolution for the watch page."""

from loguru import logger

from .identifier import validate_identifier
from .presence import normalize_viewer_count
from .record_store import RecordStore, is_store_error
from .watch_models import (
    UNEXPECTED_ERROR_MESSAGE,
    NotFoundReason,
    ResolutionOutcome,
)


class ChannelResolver:
    """Turns a watch identifier into one of NOT_FOUND / ERROR / RESOLVED.

    Existence and viewer count are fetched separately: the count only matters
    for a live channel and a failure to read it never blocks resolution.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    async def resolve(self, identifier: str | None) -> ResolutionOutcome:
        if not identifier:
            return ResolutionOutcome.not_found(identifier, NotFoundReason.MISSING)

        if not validate_identifier(identifier).valid:
            logger.info(f"Rejecting malformed watch identifier: {identifier!r}")
            return ResolutionOutcome.not_found(identifier, NotFoundReason.MALFORMED)

        # Ids are stored lowercase; links may carry either case
        lookup_id = identifier.lower()
        try:
            channel = await self._store.get_channel_by_id(lookup_id)
        except Exception as e:
            if is_store_error(e):
                logger.warning(f"Channel lookup failed for {identifier}: {e}")
                return ResolutionOutcome.error(identifier, str(e))
            logger.exception(f"Unexpected error resolving channel {identifier}: {e}")
            return ResolutionOutcome.error(identifier, UNEXPECTED_ERROR_MESSAGE)

        if channel is None:
            return ResolutionOutcome.not_found(identifier, NotFoundReason.ABSENT)

        viewer_count = 0
        if channel.is_live:
            viewer_count = await self._load_viewer_count(channel.channel_id)

        return ResolutionOutcome.resolved(identifier, channel, viewer_count)

    async def _load_viewer_count(self, channel_id: str) -> int:
        try:
            stream = await self._store.get_latest_active_stream(channel_id)
        except Exception as e:
            logger.warning(f"Viewer count unavailable for channel {channel_id}: {e}")
            return 0

        if stream is None:
            logger.info(f"Channel {channel_id} is live but has no active stream record")
            return 0
        return normalize_viewer_count(stream.viewer_count)
