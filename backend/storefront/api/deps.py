from __future__ import annotations

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import Settings, get_settings
from storefront.core.db import get_session
from storefront.core.errors import Unauthenticated
from storefront.core.security import decode_session_token
from storefront.models.user import User
from storefront.repos.user_repo import UserRepo
from storefront.services.mailer import Mailer, SmtpMailer
from storefront.services.payments import PaymentGateway, StripeGateway

log = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


async def get_db() -> AsyncSession:
    async for s in get_session():
        yield s


def get_mailer(settings: Settings = Depends(get_settings)) -> Mailer:
    return SmtpMailer(settings)


def get_payment_gateway(settings: Settings = Depends(get_settings)) -> PaymentGateway:
    return StripeGateway.from_settings(settings)


async def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User | None:
    """Resolve the actor from the session cookie (or a bearer header).

    Returns None for anonymous requests; services decide whether that is
    acceptable and raise ``Unauthenticated`` when it is not.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and creds is not None:
        token = creds.credentials
    if not token:
        return None

    try:
        user_id = decode_session_token(token, settings)
    except Unauthenticated:
        log.debug("ignoring invalid session token")
        return None

    return await UserRepo(db).get(user_id)
