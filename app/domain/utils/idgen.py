from uuid import uuid4

from ulid import ULID


def new_ulid(prefix: str | None = None) -> str:
    value = str(ULID()).lower()
    return f"{prefix}{value}" if prefix else value


def new_channel_id() -> str:
    # Channel ids travel in share links and must pass the watch page's UUID check.
    return str(uuid4())


def new_stream_id() -> str:
    return new_ulid("st_")


def new_viewer_id() -> str:
    return new_ulid("vw_")


def new_message_id() -> str:
    return new_ulid("cm_")


def new_watch_session_id() -> str:
    return new_ulid("ws_")


def new_user_id() -> str:
    return new_ulid("u_")
