from fastapi import APIRouter, Depends, Query

from app.api.v1.dependency import get_watch_service
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.watch import (
    ChatEntryOut,
    NavigateWatchIn,
    OpenWatchIn,
    OpenWatchOut,
    RegisterViewerIn,
    RegisterViewerOut,
    SendMessageIn,
    SendMessageOut,
    ShareLinkOut,
    WatchSessionIn,
    WatchSnapshotOut,
)
from app.app_config import get_app_environ_config
from app.domain.live.watch import WatchService
from app.domain.live.watch.share_link import build_share_link

router = APIRouter(prefix="/watch")


@router.post("/open")
async def open_watch(
    body: OpenWatchIn,
    service: WatchService = Depends(get_watch_service),
) -> ApiOut[OpenWatchOut]:
    """Open a watch page for a channel and wait for the channel to resolve.

    Unknown or malformed identifiers are not errors here: the returned snapshot
    carries phase `not_found` with the reason.
    """
    watch_session_id, session = await service.open(body.channel_id)
    return ApiOut[OpenWatchOut](
        results=OpenWatchOut(
            watch_session_id=watch_session_id,
            snapshot=WatchSnapshotOut.from_snapshot(session.snapshot()),
        )
    )


@router.post("/navigate")
async def navigate_watch(
    body: NavigateWatchIn,
    service: WatchService = Depends(get_watch_service),
) -> ApiOut[WatchSnapshotOut]:
    """Switch an open watch page to another channel, tearing the previous one down."""
    session = await service.navigate(body.watch_session_id, body.channel_id)
    return ApiOut[WatchSnapshotOut](results=WatchSnapshotOut.from_snapshot(session.snapshot()))


@router.get("/snapshot")
async def get_snapshot(
    watch_session_id: str = Query(..., description="Watch session id"),
    service: WatchService = Depends(get_watch_service),
) -> ApiOut[WatchSnapshotOut]:
    session = service.get_session(watch_session_id)
    return ApiOut[WatchSnapshotOut](results=WatchSnapshotOut.from_snapshot(session.snapshot()))


@router.post("/register")
async def register_viewer(
    body: RegisterViewerIn,
    service: WatchService = Depends(get_watch_service),
) -> ApiOut[RegisterViewerOut]:
    """Submit the viewer registration form.

    A rejected form is a successful call with `accepted=false`.
    """
    result, session = service.register(
        body.watch_session_id,
        body.first_name,
        body.last_name,
        body.email,
    )
    return ApiOut[RegisterViewerOut](
        results=RegisterViewerOut(
            accepted=result.accepted,
            rejection=result.rejection.value if result.rejection else None,
            message=result.message,
            snapshot=WatchSnapshotOut.from_snapshot(session.snapshot()),
        )
    )


@router.post("/send_message")
async def send_message(
    body: SendMessageIn,
    service: WatchService = Depends(get_watch_service),
) -> ApiOut[SendMessageOut]:
    entry = service.send_message(body.watch_session_id, body.text)
    return ApiOut[SendMessageOut](
        results=SendMessageOut(
            sent=entry is not None,
            message=ChatEntryOut.from_entry(entry) if entry else None,
        )
    )


@router.post("/close")
async def close_watch(
    body: WatchSessionIn,
    service: WatchService = Depends(get_watch_service),
) -> ApiOut[str]:
    await service.close(body.watch_session_id)
    return ApiOut[str](results="OK")


@router.get("/share_link")
async def get_share_link(
    channel_id: str = Query(..., description="Channel identifier"),
) -> ApiOut[ShareLinkOut]:
    origin = get_app_environ_config().FRONTEND_BASE_URL
    return ApiOut[ShareLinkOut](
        results=ShareLinkOut(channel_id=channel_id, share_link=build_share_link(origin, channel_id))
    )
