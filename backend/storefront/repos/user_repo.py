from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.enums import DEFAULT_PERMISSIONS
from storefront.models.user import User


class UserRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        res = await self.session.execute(select(User).where(User.email == email))
        return res.scalar_one_or_none()

    async def create(self, email: str, password_hash: str, name: str = "", permissions: list[str] | None = None) -> User:
        user = User(
            email=email,
            name=name,
            password_hash=password_hash,
            permissions=list(permissions if permissions is not None else DEFAULT_PERMISSIONS),
        )
        self.session.add(user)
        await self.session.flush()
        return user

    async def get(self, user_id: int) -> User | None:
        res = await self.session.execute(select(User).where(User.id == user_id))
        return res.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        res = await self.session.execute(select(User).order_by(User.id))
        return list(res.scalars().all())

    async def get_by_reset_token(self, token: str, *, valid_at: datetime) -> User | None:
        """Find the holder of ``token`` whose expiry is at or after ``valid_at``."""
        res = await self.session.execute(
            select(User).where(
                User.reset_token == token,
                User.reset_token_expiry >= valid_at,
            )
        )
        return res.scalars().first()

    async def set_reset_token(self, user: User, *, token: str, expires_at: datetime) -> User:
        user.reset_token = token
        user.reset_token_expiry = expires_at
        await self.session.flush()
        return user

    async def set_password(self, user: User, password_hash: str) -> User:
        """Store a new hash and consume any pending reset token in the same flush."""
        user.password_hash = password_hash
        user.reset_token = None
        user.reset_token_expiry = None
        await self.session.flush()
        return user

    async def set_permissions(self, user: User, permissions: list[str]) -> User:
        user.permissions = list(permissions)
        await self.session.flush()
        return user
