"""Tests for share link building and parsing."""

import uuid

import pytest

from app.domain.live.watch.share_link import build_share_link, parse_share_link


class TestBuildShareLink:
    def test_builds_watch_url(self):
        assert (
            build_share_link("https://live.example.com", "abc")
            == "https://live.example.com/watch/abc"
        )

    def test_trims_trailing_slash_on_origin(self):
        assert build_share_link("https://live.example.com/", "abc") == (
            "https://live.example.com/watch/abc"
        )


class TestParseShareLink:
    def test_round_trip(self):
        channel_id = str(uuid.uuid4())
        link = build_share_link("http://localhost:5173", channel_id)

        assert parse_share_link(link) == channel_id

    def test_ignores_query_and_fragment(self):
        assert parse_share_link("https://x.io/watch/abc?ref=tw#chat") == "abc"

    @pytest.mark.parametrize(
        "url",
        [
            "https://x.io/",
            "https://x.io/stream/abc",
            "https://x.io/watch/",
            "https://x.io/watch/abc/extra",
        ],
    )
    def test_non_watch_links(self, url):
        assert parse_share_link(url) is None
