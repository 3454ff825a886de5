from pydantic import BaseModel, Field


class LoginIn(BaseModel):
    email: str = Field(description="Broadcaster email")
    password: str = Field(description="Broadcaster password")


class SignupIn(LoginIn):
    channel_name: str = Field(default="", description="Name shown on the channel page")


class AuthUserOut(BaseModel):
    user_id: str
    email: str
    channel_name: str
    is_live: bool


class MeOut(BaseModel):
    user: AuthUserOut | None = None
    is_loading: bool = False
