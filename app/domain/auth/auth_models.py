"""Auth domain models."""

from pydantic import BaseModel


class AuthUser(BaseModel):
    """The signed-in broadcaster."""

    user_id: str
    email: str
    channel_name: str
    is_live: bool = False


def default_channel_name(email: str) -> str:
    return f"{email.split('@')[0]}'s Channel"
