"""Record store used by the watch core.

The core only needs four request/response calls, expressed by `RecordStore`.
`BeanieRecordStore` serves them from MongoDB; any driver failure is raised as
`AppError(E_STORE_UNAVAILABLE)` so callers can tell a transient store problem
from a bug.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from loguru import logger
from pymongo.errors import PyMongoError

from app.domain.utils.clock import utc_now
from app.domain.utils.idgen import new_message_id, new_viewer_id
from app.schemas import Channel, ChatMessage, Stream, Viewer
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .watch_models import ChannelSnapshot, StreamSnapshot

T = TypeVar("T")


class RecordStore(Protocol):
    async def get_channel_by_id(self, channel_id: str) -> ChannelSnapshot | None: ...

    async def get_latest_active_stream(self, channel_id: str) -> StreamSnapshot | None: ...

    async def insert_viewer(
        self, stream_id: str, first_name: str, last_name: str, email: str
    ) -> None: ...

    async def insert_chat_message(
        self, stream_id: str, text: str, author: str | None = None
    ) -> None: ...


def store_unavailable(operation: str, exc: BaseException) -> AppError:
    return AppError(
        errcode=AppErrorCode.E_STORE_UNAVAILABLE,
        errmesg=f"{operation} failed: {exc}",
        status_code=HttpStatusCode.SERVICE_UNAVAILABLE,
    )


def is_store_error(exc: BaseException) -> bool:
    return isinstance(exc, AppError) and exc.errcode == AppErrorCode.E_STORE_UNAVAILABLE


class BeanieRecordStore:
    """RecordStore backed by the Beanie documents in `app.schemas`."""

    async def _call(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        except PyMongoError as e:
            logger.warning(f"Record store {operation} failed: {e}")
            raise store_unavailable(operation, e) from e

    async def get_channel_by_id(self, channel_id: str) -> ChannelSnapshot | None:
        async def _find() -> ChannelSnapshot | None:
            channel = await Channel.find_one(Channel.channel_id == channel_id)
            if not channel:
                return None
            return ChannelSnapshot(
                channel_id=channel.channel_id,
                display_name=channel.display_name,
                description=channel.description,
                is_live=channel.is_live,
            )

        return await self._call("get_channel_by_id", _find)

    async def get_latest_active_stream(self, channel_id: str) -> StreamSnapshot | None:
        async def _find() -> StreamSnapshot | None:
            # Latest by creation time; limit 1 keeps duplicate live rows deterministic.
            streams = (
                await Stream.find(
                    Stream.channel_id == channel_id,
                    Stream.is_live == True,  # noqa: E712
                )
                .sort(-Stream.created_at)  # type: ignore[operator]
                .limit(1)
                .to_list()
            )
            if not streams:
                return None
            stream = streams[0]
            return StreamSnapshot(
                stream_id=stream.stream_id,
                channel_id=stream.channel_id,
                is_live=stream.is_live,
                viewer_count=stream.viewer_count,
                created_at=stream.created_at,
            )

        return await self._call("get_latest_active_stream", _find)

    async def insert_viewer(
        self, stream_id: str, first_name: str, last_name: str, email: str
    ) -> None:
        viewer = Viewer(
            viewer_id=new_viewer_id(),
            stream_id=stream_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            created_at=utc_now(),
        )
        await self._call("insert_viewer", viewer.insert)

    async def insert_chat_message(
        self, stream_id: str, text: str, author: str | None = None
    ) -> None:
        message = ChatMessage(
            message_id=new_message_id(),
            stream_id=stream_id,
            author=author,
            text=text,
            created_at=utc_now(),
        )
        await self._call("insert_chat_message", message.insert)
