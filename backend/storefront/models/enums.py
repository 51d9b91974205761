from __future__ import annotations

import enum


class Permission(str, enum.Enum):
    """Fixed vocabulary of permission labels a user can hold."""
    ADMIN = "ADMIN"
    USER = "USER"
    ITEMCREATE = "ITEMCREATE"
    ITEMUPDATE = "ITEMUPDATE"
    ITEMDELETE = "ITEMDELETE"
    PERMISSIONUPDATE = "PERMISSIONUPDATE"

    @classmethod
    def values(cls) -> list[str]:
        return [e.value for e in cls]


DEFAULT_PERMISSIONS: list[str] = [Permission.USER.value]
