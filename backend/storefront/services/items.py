from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import NotFound
from storefront.core.permissions import DELETE_ANY_ITEM, UPDATE_ANY_ITEM, authorize_owner_or, require_actor
from storefront.models.item import Item
from storefront.models.user import User
from storefront.repos.cart_repo import CartRepo
from storefront.repos.item_repo import ItemRepo

log = logging.getLogger(__name__)


class ItemService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ItemRepo(db)

    async def list_items(self, *, limit: int = 50, offset: int = 0) -> list[Item]:
        return await self.repo.list(limit=limit, offset=offset)

    async def count_items(self) -> int:
        return await self.repo.count()

    async def get_item(self, item_id: int) -> Item:
        item = await self.repo.get(item_id)
        if not item:
            raise NotFound("Item not found")
        return item

    async def create_item(self, actor: User | None, fields: dict[str, Any]) -> Item:
        actor = require_actor(actor)
        item = await self.repo.create(user_id=actor.id, **fields)
        await self.db.commit()
        log.info("item %s created by user=%s", item.id, actor.id)
        return item

    async def update_item(self, actor: User | None, item_id: int, changes: dict[str, Any]) -> Item:
        require_actor(actor)
        item = await self.get_item(item_id)
        authorize_owner_or(actor, item.user_id, UPDATE_ANY_ITEM)
        await self.repo.update(item, changes)
        await self.db.commit()
        return item

    async def delete_item(self, actor: User | None, item_id: int) -> Item:
        """Delete an item and any cart rows pointing at it. Past orders keep their copies."""
        require_actor(actor)
        item = await self.get_item(item_id)
        authorize_owner_or(actor, item.user_id, DELETE_ANY_ITEM)
        removed = await CartRepo(self.db).delete_for_item(item.id)
        await self.repo.delete(item)
        await self.db.commit()
        log.info("item %s deleted by user=%s (cart rows removed: %s)", item_id, actor.id, removed)
        return item
