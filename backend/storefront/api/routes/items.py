from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import get_current_user, get_db
from storefront.schemas.items import ItemCreate, ItemOut, ItemsPage, ItemUpdate
from storefront.services.items import ItemService

router = APIRouter()


@router.get("", response_model=ItemsPage)
async def list_items(
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    svc = ItemService(db)
    items = await svc.list_items(limit=limit, offset=offset)
    return ItemsPage(total=await svc.count_items(), items=[ItemOut.model_validate(it) for it in items])


@router.get("/{item_id}", response_model=ItemOut)
async def get_item(item_id: int, db: AsyncSession = Depends(get_db)):
    return await ItemService(db).get_item(item_id)


@router.post("", response_model=ItemOut, status_code=201)
async def create_item(payload: ItemCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await ItemService(db).create_item(user, payload.model_dump())


@router.patch("/{item_id}", response_model=ItemOut)
async def update_item(
    item_id: int,
    payload: ItemUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await ItemService(db).update_item(user, item_id, payload.model_dump(exclude_unset=True))


@router.delete("/{item_id}", response_model=ItemOut)
async def delete_item(item_id: int, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await ItemService(db).delete_item(user, item_id)
