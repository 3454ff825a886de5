from fastapi import APIRouter, Depends

from app.api.v1.dependency import get_auth_context
from app.api.v1.schemas.auth import AuthUserOut, LoginIn, MeOut, SignupIn
from app.api.v1.schemas.base import ApiOut
from app.domain.auth import AuthContext

router = APIRouter(prefix="/auth")


@router.post("/login")
async def login(
    body: LoginIn,
    auth: AuthContext = Depends(get_auth_context),
) -> ApiOut[AuthUserOut]:
    user = await auth.login(body.email, body.password)
    return ApiOut[AuthUserOut](results=AuthUserOut(**user.model_dump()))


@router.post("/signup")
async def signup(
    body: SignupIn,
    auth: AuthContext = Depends(get_auth_context),
) -> ApiOut[AuthUserOut]:
    user = await auth.signup(body.email, body.password, body.channel_name)
    return ApiOut[AuthUserOut](results=AuthUserOut(**user.model_dump()))


@router.post("/logout")
async def logout(auth: AuthContext = Depends(get_auth_context)) -> ApiOut[str]:
    auth.logout()
    return ApiOut[str](results="OK")


@router.get("/me")
async def me(auth: AuthContext = Depends(get_auth_context)) -> ApiOut[MeOut]:
    user = auth.user
    return ApiOut[MeOut](
        results=MeOut(
            user=AuthUserOut(**user.model_dump()) if user else None,
            is_loading=auth.is_loading,
        )
    )
