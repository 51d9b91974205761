from __future__ import annotations

from pydantic import BaseModel

from storefront.models.enums import Permission


class PermissionsUpdate(BaseModel):
    permissions: list[Permission]
