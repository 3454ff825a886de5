from fastapi import APIRouter, Depends, Query

from app.api.v1.dependency import CurrentUser, get_auth_context, get_broadcast_service
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.broadcast import (
    BroadcastStatusOut,
    ChannelActionIn,
    CreateChannelIn,
    CreateChannelOut,
)
from app.domain.auth import AuthContext
from app.domain.live.broadcast import BroadcastService

router = APIRouter(prefix="/broadcast")


@router.post("/create_channel")
async def create_channel(
    body: CreateChannelIn,
    user: CurrentUser,
    service: BroadcastService = Depends(get_broadcast_service),
) -> ApiOut[CreateChannelOut]:
    """Create a channel for the signed-in broadcaster."""
    result = await service.create_channel(
        user_id=user.user_id,
        display_name=body.display_name or user.channel_name,
        description=body.description,
    )
    return ApiOut[CreateChannelOut](
        results=CreateChannelOut(
            channel_id=result.channel_id,
            display_name=result.display_name,
            share_link=result.share_link,
            created_at=result.created_at,
        )
    )


@router.post("/go_live")
async def go_live(
    body: ChannelActionIn,
    user: CurrentUser,
    service: BroadcastService = Depends(get_broadcast_service),
    auth: AuthContext = Depends(get_auth_context),
) -> ApiOut[BroadcastStatusOut]:
    status = await service.go_live(body.channel_id, user.user_id)
    auth.set_live(True)
    return ApiOut[BroadcastStatusOut](results=BroadcastStatusOut(**status.model_dump()))


@router.post("/end_live")
async def end_live(
    body: ChannelActionIn,
    user: CurrentUser,
    service: BroadcastService = Depends(get_broadcast_service),
    auth: AuthContext = Depends(get_auth_context),
) -> ApiOut[BroadcastStatusOut]:
    status = await service.end_live(body.channel_id, user.user_id)
    auth.set_live(False)
    return ApiOut[BroadcastStatusOut](results=BroadcastStatusOut(**status.model_dump()))


@router.get("/status")
async def get_status(
    channel_id: str = Query(..., description="Channel identifier"),
    service: BroadcastService = Depends(get_broadcast_service),
) -> ApiOut[BroadcastStatusOut]:
    status = await service.get_status(channel_id)
    return ApiOut[BroadcastStatusOut](results=BroadcastStatusOut(**status.model_dump()))
