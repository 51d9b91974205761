from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import get_current_user, get_db
from storefront.schemas.cart import CartItemOut, CartOut
from storefront.services.cart import CartService

router = APIRouter()


@router.get("", response_model=CartOut)
async def get_cart(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    rows = await CartService(db).get_cart(user)
    return CartOut(
        items=[CartItemOut.model_validate(r) for r in rows],
        count=sum(r.quantity for r in rows),
        total=sum(r.item.price * r.quantity for r in rows if r.item is not None),
    )


@router.post("/items/{item_id}", response_model=CartItemOut)
async def add_to_cart(item_id: int, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await CartService(db).add_to_cart(user, item_id)


@router.delete("/{cart_item_id}", response_model=CartItemOut)
async def remove_from_cart(cart_item_id: int, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await CartService(db).remove_from_cart(user, cart_item_id)
