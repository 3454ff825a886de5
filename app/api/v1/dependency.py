from typing import Annotated

from fastapi import Depends, Request
from loguru import logger

from app.domain.auth import AuthContext, AuthUser
from app.domain.live.broadcast import BroadcastService
from app.domain.live.watch import WatchService


def get_watch_service(request: Request) -> WatchService:
    return request.app.state.watch_service


def get_auth_context(request: Request) -> AuthContext:
    return request.app.state.auth_context


def get_broadcast_service(request: Request) -> BroadcastService:
    return request.app.state.broadcast_service


async def get_current_user(auth: AuthContext = Depends(get_auth_context)) -> AuthUser:
    user = auth.require_user()
    logger.debug("Authenticated user_id: {}", user.user_id)
    return user


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
