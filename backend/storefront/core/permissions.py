from __future__ import annotations

from typing import Iterable

from storefront.core.errors import Forbidden, Unauthenticated
from storefront.models.enums import Permission
from storefront.models.user import User

# Named gates, so routes and services agree on the same sets.
MANAGE_USERS: frozenset[str] = frozenset({Permission.ADMIN.value, Permission.PERMISSIONUPDATE.value})
UPDATE_ANY_ITEM: frozenset[str] = frozenset({Permission.ADMIN.value, Permission.ITEMUPDATE.value})
DELETE_ANY_ITEM: frozenset[str] = frozenset({Permission.ADMIN.value, Permission.ITEMDELETE.value})
VIEW_ANY_ORDER: frozenset[str] = frozenset({Permission.ADMIN.value})


def _labels(values: Iterable[str | Permission]) -> set[str]:
    return {v.value if isinstance(v, Permission) else str(v) for v in values}


def require_actor(actor: User | None) -> User:
    if actor is None:
        raise Unauthenticated()
    return actor


def has_permission(actor: User | None, required_any_of: Iterable[str | Permission]) -> bool:
    """Any-of check: True when the actor holds at least one required label."""
    if actor is None:
        return False
    return bool(_labels(actor.permissions or []) & _labels(required_any_of))


def authorize(actor: User | None, required_any_of: Iterable[str | Permission]) -> User:
    """Pure permission gate. No ownership escape."""
    actor = require_actor(actor)
    required = _labels(required_any_of)
    if not has_permission(actor, required):
        raise Forbidden(f"You need one of: {', '.join(sorted(required))}")
    return actor


def authorize_owner_or(
    actor: User | None,
    owner_id: int | None,
    required_any_of: Iterable[str | Permission] = (),
) -> User:
    """Ownership-or-permission gate.

    The resource owner always passes, whatever their permission set. Anyone
    else needs one of ``required_any_of``; an empty set means owner-only.
    """
    actor = require_actor(actor)
    if owner_id is not None and actor.id == owner_id:
        return actor
    if not has_permission(actor, required_any_of):
        raise Forbidden()
    return actor
