from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import get_current_user, get_db, get_payment_gateway
from storefront.core.config import Settings, get_settings
from storefront.schemas.orders import CheckoutIn, OrderOut
from storefront.services.checkout import CheckoutService
from storefront.services.payments import PaymentGateway

router = APIRouter()


@router.post("/checkout", response_model=OrderOut, status_code=201)
async def checkout(
    payload: CheckoutIn,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    return await CheckoutService(db, gateway, settings).checkout(user, payload.token)


@router.get("", response_model=list[OrderOut])
async def list_orders(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    # Reads never touch the gateway.
    return await CheckoutService(db, gateway=None, settings=settings).list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    return await CheckoutService(db, gateway=None, settings=settings).get_order(user, order_id)
