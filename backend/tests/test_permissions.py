from __future__ import annotations

import pytest

from storefront.core.errors import Forbidden, Unauthenticated
from storefront.core.permissions import authorize, authorize_owner_or, has_permission
from storefront.models.enums import Permission
from storefront.models.user import User


def _user(user_id: int, *perms: str) -> User:
    return User(id=user_id, email=f"u{user_id}@example.com", password_hash="x", permissions=list(perms))


def test_any_of_semantics():
    assert not has_permission(_user(1, "USER"), {"ADMIN", "ITEMDELETE"})
    assert has_permission(_user(1, "ADMIN"), {"ADMIN", "ITEMDELETE"})
    assert has_permission(_user(1, "USER", "ITEMDELETE"), {"ADMIN", "ITEMDELETE"})


def test_authorize_rejects_user_without_required_permission():
    with pytest.raises(Forbidden):
        authorize(_user(1, "USER"), {"ADMIN", "ITEMDELETE"})


def test_authorize_accepts_admin():
    actor = _user(1, "ADMIN")
    assert authorize(actor, {"ADMIN", "ITEMDELETE"}) is actor


def test_authorize_accepts_enum_members():
    authorize(_user(1, "PERMISSIONUPDATE"), [Permission.ADMIN, Permission.PERMISSIONUPDATE])


def test_pure_gate_has_no_ownership_escape():
    # Holding the resource does not matter for the pure gate.
    with pytest.raises(Forbidden):
        authorize(_user(1, "USER"), {"ADMIN"})


def test_owner_passes_ownership_gate_with_plain_user_permissions():
    actor = _user(5, "USER")
    assert authorize_owner_or(actor, 5, {"ADMIN", "ITEMDELETE"}) is actor


def test_non_owner_needs_permission():
    with pytest.raises(Forbidden):
        authorize_owner_or(_user(5, "USER"), 6, {"ADMIN", "ITEMDELETE"})
    authorize_owner_or(_user(5, "ITEMDELETE"), 6, {"ADMIN", "ITEMDELETE"})


def test_owner_only_gate():
    with pytest.raises(Forbidden):
        authorize_owner_or(_user(5, "ADMIN"), 6)


def test_anonymous_actor_is_unauthenticated_not_forbidden():
    with pytest.raises(Unauthenticated):
        authorize(None, {"ADMIN"})
    with pytest.raises(Unauthenticated):
        authorize_owner_or(None, 1, {"ADMIN"})
    assert not has_permission(None, {"USER"})


def test_empty_permission_set_never_passes():
    with pytest.raises(Forbidden):
        authorize(_user(1), {"ADMIN"})
