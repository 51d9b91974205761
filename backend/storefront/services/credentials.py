from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import Settings
from storefront.core.errors import InvalidInput, InvalidOrExpired, NotFound, PasswordMismatch, Unauthenticated
from storefront.core.security import (
    create_session_token,
    generate_reset_token,
    hash_password,
    verify_password,
)
from storefront.models.user import User
from storefront.repos.user_repo import UserRepo
from storefront.services.mailer import Mailer, make_a_nice_email

log = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass(frozen=True)
class ResetRequest:
    message: str
    expires_at: datetime
    # Only exposed outside production, where mail delivery may be absent.
    reset_token: str | None = None


class CredentialService:
    """Signup, signin, sessions and the password-reset lifecycle."""

    def __init__(self, db: AsyncSession, settings: Settings, mailer: Mailer | None = None):
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.users = UserRepo(db)

    def issue_session(self, user: User) -> str:
        return create_session_token(user.id, self.settings)

    async def signup(self, *, email: str, password: str, name: str = "") -> tuple[User, str]:
        email = normalize_email(email)
        if await self.users.get_by_email(email):
            raise InvalidInput("Email already registered")
        user = await self.users.create(email=email, name=name, password_hash=hash_password(password))
        await self.db.commit()
        log.info("user signed up id=%s", user.id)
        return user, self.issue_session(user)

    async def signin(self, *, email: str, password: str) -> tuple[User, str]:
        user = await self.users.get_by_email(normalize_email(email))
        if not user or not verify_password(password, user.password_hash):
            raise Unauthenticated("Incorrect email or password")
        log.info("user signed in id=%s", user.id)
        return user, self.issue_session(user)

    async def request_password_reset(self, email: str) -> ResetRequest:
        email = normalize_email(email)
        user = await self.users.get_by_email(email)
        if not user:
            raise NotFound(f"No such user found for email {email}")

        token = generate_reset_token()
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=self.settings.RESET_TOKEN_TTL_MIN)
        await self.users.set_reset_token(user, token=token, expires_at=expires_at)
        await self.db.commit()
        log.info("password reset requested user=%s", user.id)

        await self._send_reset_email(user, token)

        return ResetRequest(
            message="Reset sent!",
            expires_at=expires_at,
            reset_token=None if self.settings.is_production else token,
        )

    async def _send_reset_email(self, user: User, token: str) -> None:
        # The token is already stored; a failed send must not undo it.
        if self.mailer is None:
            log.warning("no mailer configured, reset email for user=%s not sent", user.id)
            return
        link = f"{self.settings.FRONTEND_URL.rstrip('/')}/reset?resetToken={token}"
        try:
            await self.mailer.send(
                from_addr=self.settings.MAIL_FROM,
                to=user.email,
                subject="Your Password Reset Token",
                html=make_a_nice_email(
                    f'Your Password Reset Token is here!\n\n<a href="{link}">Click Here to Reset</a>'
                ),
            )
        except Exception:
            log.exception("reset email to user=%s failed", user.id)

    async def reset_password(self, *, reset_token: str, password: str, confirm_password: str) -> tuple[User, str]:
        if password != confirm_password:
            raise PasswordMismatch()

        # Tokens stay usable for one TTL past their stored expiry.
        cutoff = datetime.now(timezone.utc) - timedelta(minutes=self.settings.RESET_TOKEN_TTL_MIN)
        user = await self.users.get_by_reset_token(reset_token, valid_at=cutoff)
        if not user:
            raise InvalidOrExpired()

        await self.users.set_password(user, hash_password(password))
        await self.db.commit()
        log.info("password reset completed user=%s", user.id)
        return user, self.issue_session(user)
