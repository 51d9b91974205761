from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.cookies import clear_session_cookie, set_session_cookie
from storefront.api.deps import get_current_user, get_db, get_mailer
from storefront.core.config import Settings, get_settings
from storefront.models.user import User
from storefront.schemas.auth import (
    MessageOut,
    ResetPasswordIn,
    ResetRequestIn,
    ResetRequestOut,
    SigninRequest,
    SignupRequest,
    UserOut,
)
from storefront.services.credentials import CredentialService
from storefront.services.mailer import Mailer

router = APIRouter()


@router.post("/signup", response_model=UserOut)
async def signup(
    payload: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, token = await CredentialService(db, settings).signup(
        email=payload.email, password=payload.password, name=payload.name
    )
    set_session_cookie(response, token, settings)
    return user


@router.post("/signin", response_model=UserOut)
async def signin(
    payload: SigninRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, token = await CredentialService(db, settings).signin(email=payload.email, password=payload.password)
    set_session_cookie(response, token, settings)
    return user


@router.post("/signout", response_model=MessageOut)
async def signout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return MessageOut(message="Good Bye!")


@router.get("/me", response_model=UserOut | None)
async def me(user: User | None = Depends(get_current_user)):
    return user


@router.post("/request-reset", response_model=ResetRequestOut)
async def request_reset(
    payload: ResetRequestIn,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
):
    res = await CredentialService(db, settings, mailer).request_password_reset(payload.email)
    return ResetRequestOut(message=res.message, expires_at=res.expires_at, reset_token=res.reset_token)


@router.post("/reset-password", response_model=UserOut)
async def reset_password(
    payload: ResetPasswordIn,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, token = await CredentialService(db, settings).reset_password(
        reset_token=payload.reset_token,
        password=payload.password,
        confirm_password=payload.confirm_password,
    )
    set_session_cookie(response, token, settings)
    return user
