from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import InvalidInput, NotFound
from storefront.core.permissions import MANAGE_USERS, authorize
from storefront.models.enums import Permission
from storefront.models.user import User
from storefront.repos.user_repo import UserRepo

log = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = UserRepo(db)

    async def list_users(self, actor: User | None) -> list[User]:
        authorize(actor, MANAGE_USERS)
        return await self.repo.list_all()

    async def update_permissions(self, actor: User | None, user_id: int, permissions: list[str]) -> User:
        actor = authorize(actor, MANAGE_USERS)

        allowed = set(Permission.values())
        unknown = [p for p in permissions if p not in allowed]
        if unknown:
            raise InvalidInput(f"Unknown permissions: {', '.join(unknown)}")

        target = await self.repo.get(user_id)
        if not target:
            raise NotFound("User not found")

        # keep vocabulary order, drop duplicates
        ordered = [p for p in Permission.values() if p in set(permissions)]
        await self.repo.set_permissions(target, ordered)
        await self.db.commit()
        log.info("permissions of user=%s set to %s by user=%s", target.id, ordered, actor.id)
        return target
