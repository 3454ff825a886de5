"""Credential check backends."""

import asyncio
from typing import Protocol

from app.domain.utils.idgen import new_user_id
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .auth_models import AuthUser, default_channel_name


class AuthProvider(Protocol):
    async def login(self, email: str, password: str) -> AuthUser: ...

    async def signup(self, email: str, password: str, channel_name: str) -> AuthUser: ...


class DemoAuthProvider:
    """Accepts any non-empty credentials and mints a fresh user.

    `latency` simulates the round trip of a real identity backend.
    """

    def __init__(self, latency: float = 0.0):
        self._latency = latency

    async def _simulate_call(self, email: str, password: str) -> str:
        email = (email or "").strip()
        if not email or not password:
            raise AppError(
                errcode=AppErrorCode.E_BAD_CREDENTIALS,
                errmesg="Email and password are required",
                status_code=HttpStatusCode.UNAUTHORIZED,
            )
        if self._latency > 0:
            await asyncio.sleep(self._latency)
        return email

    async def login(self, email: str, password: str) -> AuthUser:
        email = await self._simulate_call(email, password)
        return AuthUser(
            user_id=new_user_id(),
            email=email,
            channel_name=default_channel_name(email),
        )

    async def signup(self, email: str, password: str, channel_name: str) -> AuthUser:
        email = await self._simulate_call(email, password)
        channel_name = (channel_name or "").strip()
        return AuthUser(
            user_id=new_user_id(),
            email=email,
            channel_name=channel_name or default_channel_name(email),
        )
