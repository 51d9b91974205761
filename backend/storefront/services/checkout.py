from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import Settings
from storefront.core.errors import GatewayError, InvalidInput, NotFound, PostChargeFailure
from storefront.core.permissions import VIEW_ANY_ORDER, authorize_owner_or, require_actor
from storefront.models.cart_item import CartItem
from storefront.models.order import Order
from storefront.models.user import User
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.payments import Charge, PaymentGateway

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    """One cart row frozen at checkout time."""

    cart_item_id: int
    title: str
    description: str
    price: int
    image: str | None
    large_image: str | None
    quantity: int

    @classmethod
    def from_cart_item(cls, ci: CartItem) -> "CartLine":
        it = ci.item
        return cls(
            cart_item_id=ci.id,
            title=it.title,
            description=it.description or "",
            price=int(it.price),
            image=it.image,
            large_image=it.large_image,
            quantity=int(ci.quantity),
        )

    def as_order_item(self) -> dict:
        # No reference to the live item: later edits must not rewrite history.
        return {
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "large_image": self.large_image,
            "quantity": self.quantity,
        }


def cart_total(lines: list[CartLine]) -> int:
    return sum(line.price * line.quantity for line in lines)


class CheckoutService:
    """Turns the actor's cart into a paid order.

    snapshot -> total -> charge -> persist order + clear snapshotted rows.

    A gateway failure leaves the cart untouched. Anything failing after the
    charge went through is raised as ``PostChargeFailure``.
    """

    def __init__(self, db: AsyncSession, gateway: PaymentGateway | None, settings: Settings):
        self.db = db
        self.gateway = gateway
        self.currency = settings.PAYMENT_CURRENCY
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db)

    async def snapshot(self, user_id: int) -> list[CartLine]:
        rows = await self.carts.list_for_user(user_id)
        return [CartLine.from_cart_item(ci) for ci in rows if ci.item is not None]

    async def checkout(self, actor: User | None, payment_token: str) -> Order:
        actor = require_actor(actor)
        user_id = actor.id

        lines = await self.snapshot(user_id)
        if not lines:
            raise InvalidInput("Your cart is empty")
        amount = cart_total(lines)
        if self.gateway is None:
            raise GatewayError("Payments are not configured")
        # No connection is held across the charge; the order is written in a fresh transaction.
        await self.db.commit()

        log.info("charging user=%s amount=%s %s lines=%s", user_id, amount, self.currency, len(lines))
        # GatewayError propagates as-is: nothing has been written yet.
        charge = await self.gateway.charge(amount=amount, currency=self.currency, source=payment_token)
        log.info("charge %s captured amount=%s for user=%s", charge.id, charge.amount, user_id)

        try:
            order = await self._record(user_id, charge, lines)
        except Exception as e:
            await self.db.rollback()
            log.error(
                "POST-CHARGE FAILURE user=%s charge=%s amount=%s: %s",
                user_id,
                charge.id,
                charge.amount,
                e,
                exc_info=True,
            )
            raise PostChargeFailure(user_id=user_id, charge_id=charge.id, amount=charge.amount) from e
        return order

    async def _record(self, user_id: int, charge: Charge, lines: list[CartLine]) -> Order:
        order = await self.orders.create(
            user_id=user_id,
            total=charge.amount,
            currency=self.currency,
            charge=charge.id,
            items=[line.as_order_item() for line in lines],
        )
        removed = await self.carts.delete_ids(user_id, [line.cart_item_id for line in lines])
        await self.db.commit()
        log.info("order %s created for user=%s, %s cart rows cleared", order.id, user_id, removed)
        return order

    async def list_orders(self, actor: User | None) -> list[Order]:
        actor = require_actor(actor)
        return await self.orders.list_for_user(actor.id)

    async def get_order(self, actor: User | None, order_id: int) -> Order:
        require_actor(actor)
        order = await self.orders.get(order_id)
        if not order:
            raise NotFound("Order not found")
        authorize_owner_or(actor, order.user_id, VIEW_ANY_ORDER)
        return order
