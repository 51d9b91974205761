from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import get_current_user, get_db
from storefront.schemas.auth import UserOut
from storefront.schemas.users import PermissionsUpdate
from storefront.services.users import UserService

router = APIRouter()


@router.get("", response_model=list[UserOut])
async def list_users(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await UserService(db).list_users(user)


@router.put("/{user_id}/permissions", response_model=UserOut)
async def update_permissions(
    user_id: int,
    payload: PermissionsUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await UserService(db).update_permissions(user, user_id, [p.value for p in payload.permissions])
