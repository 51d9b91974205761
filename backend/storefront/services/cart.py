from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import NotFound
from storefront.core.permissions import authorize_owner_or, require_actor
from storefront.models.cart_item import CartItem
from storefront.models.user import User
from storefront.repos.cart_repo import CartRepo
from storefront.repos.item_repo import ItemRepo

log = logging.getLogger(__name__)


class CartService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CartRepo(db)

    async def get_cart(self, actor: User | None) -> list[CartItem]:
        actor = require_actor(actor)
        return await self.repo.list_for_user(actor.id)

    async def add_to_cart(self, actor: User | None, item_id: int) -> CartItem:
        actor = require_actor(actor)
        if not await ItemRepo(self.db).get(item_id):
            raise NotFound("Item not found")

        cart_item = await self.repo.add_or_increment(actor.id, item_id)
        await self.db.commit()
        log.info("cart user=%s item=%s quantity=%s", actor.id, item_id, cart_item.quantity)
        return cart_item

    async def remove_from_cart(self, actor: User | None, cart_item_id: int) -> CartItem:
        actor = require_actor(actor)
        cart_item = await self.repo.get(cart_item_id)
        if not cart_item:
            raise NotFound("No cart item found")
        # Owner only: nobody edits another user's cart.
        authorize_owner_or(actor, cart_item.user_id)

        await self.repo.delete(cart_item)
        await self.db.commit()
        log.info("cart user=%s removed cart_item=%s", actor.id, cart_item_id)
        return cart_item
