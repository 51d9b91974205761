from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import stripe

from storefront.core.config import Settings
from storefront.core.errors import GatewayError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Charge:
    id: str
    amount: int


class PaymentGateway(Protocol):
    async def charge(self, *, amount: int, currency: str, source: str) -> Charge:
        ...


class StripeGateway:
    """Charges a single-use card token through Stripe's Charges API.

    One call per checkout. Never retried here: the token is single-use and a
    blind retry could bill the customer twice.
    """

    def __init__(self, api_key: str | None):
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeGateway":
        return cls(settings.STRIPE_SECRET_KEY)

    async def charge(self, *, amount: int, currency: str, source: str) -> Charge:
        if not self._api_key:
            raise GatewayError("Payments are not configured")
        try:
            resp = await asyncio.to_thread(
                stripe.Charge.create,
                api_key=self._api_key,
                amount=int(amount),
                currency=currency.lower(),
                source=source,
            )
        except stripe.StripeError as e:
            log.warning("stripe charge failed: %s", getattr(e, "user_message", None) or e)
            raise GatewayError(getattr(e, "user_message", None) or "Payment was declined") from e
        return Charge(id=str(resp["id"]), amount=int(resp["amount"]))
