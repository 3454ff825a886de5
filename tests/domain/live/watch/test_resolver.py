"""Tests for ChannelResolver."""

from app.domain.live.watch.resolver import ChannelResolver
from app.domain.live.watch.watch_models import (
    UNEXPECTED_ERROR_MESSAGE,
    NotFoundReason,
    ResolutionStatus,
)


class TestResolveNotFound:
    """Identifiers that can never resolve."""

    async def test_missing_identifier(self, memory_store):
        outcome = await ChannelResolver(memory_store).resolve(None)

        assert outcome.status == ResolutionStatus.NOT_FOUND
        assert outcome.reason == NotFoundReason.MISSING
        assert outcome.message == "no identifier supplied"

    async def test_empty_identifier_is_missing(self, memory_store):
        outcome = await ChannelResolver(memory_store).resolve("")

        assert outcome.reason == NotFoundReason.MISSING

    async def test_malformed_identifier_skips_store(self, memory_store):
        """A malformed identifier must not reach the store."""
        outcome = await ChannelResolver(memory_store).resolve("abc")

        assert outcome.status == ResolutionStatus.NOT_FOUND
        assert outcome.reason == NotFoundReason.MALFORMED
        assert outcome.message == "malformed identifier"
        assert sum(memory_store.calls.values()) == 0

    async def test_absent_channel(self, memory_store, channel_id):
        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.NOT_FOUND
        assert outcome.reason == NotFoundReason.ABSENT
        assert outcome.message == "not present in store"
        assert memory_store.calls["get_channel_by_id"] == 1


class TestResolveError:
    async def test_store_failure_becomes_error(self, memory_store, channel_id):
        memory_store.fail_on.add("get_channel_by_id")

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.ERROR
        assert "get_channel_by_id failed" in (outcome.message or "")
        assert outcome.channel is None

    async def test_unexpected_failure_gets_generic_message(self, memory_store, channel_id):
        memory_store.crash_on.add("get_channel_by_id")

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.ERROR
        assert outcome.message == UNEXPECTED_ERROR_MESSAGE


class TestResolveFound:
    async def test_offline_channel_has_zero_viewers_without_stream_query(
        self, memory_store, channel_id
    ):
        memory_store.add_channel(channel_id, display_name="Offline", is_live=False)
        memory_store.add_stream(channel_id, viewer_count=99)

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.RESOLVED
        assert outcome.channel is not None
        assert outcome.channel.display_name == "Offline"
        assert outcome.viewer_count == 0
        assert memory_store.calls["get_latest_active_stream"] == 0

    async def test_live_channel_reads_latest_stream_count(self, memory_store, channel_id):
        memory_store.add_channel(channel_id, is_live=True)
        memory_store.add_stream(channel_id, stream_id="st_old", viewer_count=3, age_seconds=600)
        memory_store.add_stream(channel_id, stream_id="st_new", viewer_count=17)

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.RESOLVED
        assert outcome.viewer_count == 17

    async def test_live_channel_without_stream_degrades_to_zero(self, memory_store, channel_id):
        memory_store.add_channel(channel_id, is_live=True)

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.RESOLVED
        assert outcome.viewer_count == 0

    async def test_viewer_count_failure_does_not_block_resolution(self, memory_store, channel_id):
        memory_store.add_channel(channel_id, is_live=True)
        memory_store.fail_on.add("get_latest_active_stream")

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.status == ResolutionStatus.RESOLVED
        assert outcome.viewer_count == 0

    async def test_garbage_viewer_count_is_normalised(self, memory_store, channel_id):
        memory_store.add_channel(channel_id, is_live=True)
        memory_store.add_stream(channel_id, viewer_count=-5)

        outcome = await ChannelResolver(memory_store).resolve(channel_id)

        assert outcome.viewer_count == 0

    async def test_uppercase_link_resolves_stored_channel(self, memory_store, channel_id):
        """Channel ids are stored lowercase; an uppercase link still finds them."""
        memory_store.add_channel(channel_id, is_live=True)
        memory_store.add_stream(channel_id, viewer_count=4)

        outcome = await ChannelResolver(memory_store).resolve(channel_id.upper())

        assert outcome.status == ResolutionStatus.RESOLVED
        assert outcome.identifier == channel_id.upper()
        assert outcome.channel is not None
        assert outcome.channel.channel_id == channel_id
        assert outcome.viewer_count == 4
