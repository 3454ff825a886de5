"""Shareable watch links: `{origin}/watch/{channel_id}`."""

from urllib.parse import unquote, urlsplit

WATCH_PATH_PREFIX = "/watch/"


def build_share_link(origin: str, channel_id: str) -> str:
    return f"{origin.rstrip('/')}{WATCH_PATH_PREFIX}{channel_id}"


def parse_share_link(url: str) -> str | None:
    """Return the channel id carried by a watch link, or None if it is not one."""
    path = urlsplit(url).path
    marker = path.rfind(WATCH_PATH_PREFIX)
    if marker == -1:
        return None

    channel_id = unquote(path[marker + len(WATCH_PATH_PREFIX) :]).strip("/")
    if not channel_id or "/" in channel_id:
        return None
    return channel_id
