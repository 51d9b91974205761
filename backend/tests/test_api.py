from __future__ import annotations

from sqlalchemy import func, select

from storefront.models.cart_item import CartItem
from tests.conftest import PASSWORD


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def _signup(client, email="wes@example.com", password="secret123") -> str:
    resp = await client.post("/api/auth/signup", json={"email": email, "password": password, "name": "Wes"})
    assert resp.status_code == 200, resp.text
    token = resp.cookies["token"]
    # Tests pick the actor explicitly via the bearer header.
    client.cookies.clear()
    return token


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.json() == {"ok": True}


async def test_signup_sets_http_only_year_long_cookie(client):
    resp = await client.post("/api/auth/signup", json={"email": "Wes@Example.com", "password": "secret123"})

    assert resp.status_code == 200
    assert resp.json()["email"] == "wes@example.com"
    assert resp.json()["permissions"] == ["USER"]
    set_cookie = resp.headers["set-cookie"].lower()
    assert set_cookie.startswith("token=")
    assert "httponly" in set_cookie
    assert "max-age=31536000" in set_cookie


async def test_me_with_and_without_session(client):
    token = await _signup(client)
    me = await client.get("/api/auth/me", headers=_auth(token))
    assert me.json()["email"] == "wes@example.com"

    anon = await client.get("/api/auth/me")
    assert anon.status_code == 200
    assert anon.json() is None


async def test_signin_and_bad_credentials(client, make_user):
    await make_user("kait@example.com")
    ok = await client.post("/api/auth/signin", json={"email": "kait@example.com", "password": PASSWORD})
    assert ok.status_code == 200
    assert "token" in ok.cookies

    bad = await client.post("/api/auth/signin", json={"email": "kait@example.com", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.json() == {"detail": "Incorrect email or password", "code": "unauthenticated"}


async def test_signout_clears_cookie(client):
    resp = await client.post("/api/auth/signout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Good Bye!"}
    assert 'token=""' in resp.headers["set-cookie"] or "max-age=0" in resp.headers["set-cookie"].lower()


async def test_password_reset_flow(client, mailer):
    await _signup(client)

    missing = await client.post("/api/auth/request-reset", json={"email": "ghost@example.com"})
    assert missing.status_code == 404

    req = await client.post("/api/auth/request-reset", json={"email": "wes@example.com"})
    assert req.status_code == 200
    reset_token = req.json()["reset_token"]
    assert len(mailer.sent) == 1

    mismatch = await client.post(
        "/api/auth/reset-password",
        json={"reset_token": reset_token, "password": "newpass1", "confirm_password": "newpass2"},
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["code"] == "invalid_input"

    done = await client.post(
        "/api/auth/reset-password",
        json={"reset_token": reset_token, "password": "newpass1", "confirm_password": "newpass1"},
    )
    assert done.status_code == 200
    assert "token" in done.cookies

    reused = await client.post(
        "/api/auth/reset-password",
        json={"reset_token": reset_token, "password": "newpass1", "confirm_password": "newpass1"},
    )
    assert reused.status_code == 400
    assert reused.json()["code"] == "invalid_or_expired"

    signin = await client.post("/api/auth/signin", json={"email": "wes@example.com", "password": "newpass1"})
    assert signin.status_code == 200


async def test_mutations_require_session(client):
    assert (await client.post("/api/items", json={"title": "Hat", "price": 100})).status_code == 401
    assert (await client.post("/api/cart/items/1")).status_code == 401
    assert (await client.post("/api/orders/checkout", json={"token": "tok_visa"})).status_code == 401
    assert (await client.get("/api/users")).status_code == 401


async def test_invalid_session_token_counts_as_anonymous(client):
    resp = await client.post("/api/cart/items/1", headers=_auth("garbage"))
    assert resp.status_code == 401


async def test_item_lifecycle_and_delete_permissions(client):
    owner = await _signup(client, "wes@example.com")
    stranger = await _signup(client, "kait@example.com")

    created = await client.post(
        "/api/items", json={"title": "Hat", "price": 1500, "description": "warm"}, headers=_auth(owner)
    )
    assert created.status_code == 201
    item_id = created.json()["id"]

    listing = await client.get("/api/items")
    assert listing.json()["total"] == 1

    patched = await client.patch(f"/api/items/{item_id}", json={"price": 1600}, headers=_auth(owner))
    assert patched.json()["price"] == 1600

    forbidden = await client.delete(f"/api/items/{item_id}", headers=_auth(stranger))
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "forbidden"

    deleted = await client.delete(f"/api/items/{item_id}", headers=_auth(owner))
    assert deleted.status_code == 200
    assert (await client.get(f"/api/items/{item_id}")).status_code == 404


async def test_cart_and_checkout_over_http(client, gateway, db, make_user, make_item):
    seller = await make_user("seller@example.com")
    shirt = await make_item(seller, price=1000, title="shirt")
    socks = await make_item(seller, price=500, title="socks")
    token = await _signup(client, "buyer@example.com")

    for item_id in (shirt.id, shirt.id, socks.id):
        resp = await client.post(f"/api/cart/items/{item_id}", headers=_auth(token))
        assert resp.status_code == 200

    cart = (await client.get("/api/cart", headers=_auth(token))).json()
    assert cart["count"] == 3
    assert cart["total"] == 2500
    assert len(cart["items"]) == 2

    resp = await client.post("/api/orders/checkout", json={"token": "tok_visa"}, headers=_auth(token))
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert order["total"] == 2500
    assert order["currency"] == "USD"
    assert order["charge"] == "ch_test_1"
    assert [(i["title"], i["quantity"]) for i in order["items"]] == [("shirt", 2), ("socks", 1)]
    assert gateway.calls[0]["amount"] == 2500

    cart = (await client.get("/api/cart", headers=_auth(token))).json()
    assert cart["items"] == []

    mine = (await client.get("/api/orders", headers=_auth(token))).json()
    assert [o["id"] for o in mine] == [order["id"]]

    other = await _signup(client, "nosy@example.com")
    peek = await client.get(f"/api/orders/{order['id']}", headers=_auth(other))
    assert peek.status_code == 403


async def test_declined_card_returns_402_and_keeps_cart(client, gateway, db, make_user, make_item):
    seller = await make_user("seller@example.com")
    item = await make_item(seller, price=1000)
    token = await _signup(client, "buyer@example.com")
    await client.post(f"/api/cart/items/{item.id}", headers=_auth(token))

    gateway.fail = True
    resp = await client.post("/api/orders/checkout", json={"token": "tok_chargeDeclined"}, headers=_auth(token))

    assert resp.status_code == 402
    assert resp.json()["code"] == "payment_failed"
    res = await db.execute(select(func.count(CartItem.id)))
    assert res.scalar_one() == 1


async def test_remove_someone_elses_cart_item_is_forbidden(client, make_user, make_item):
    seller = await make_user("seller@example.com")
    item = await make_item(seller)
    buyer = await _signup(client, "buyer@example.com")
    other = await _signup(client, "other@example.com")
    added = (await client.post(f"/api/cart/items/{item.id}", headers=_auth(buyer))).json()

    resp = await client.delete(f"/api/cart/{added['id']}", headers=_auth(other))
    assert resp.status_code == 403

    resp = await client.delete(f"/api/cart/{added['id']}", headers=_auth(buyer))
    assert resp.status_code == 200
    assert (await client.delete(f"/api/cart/{added['id']}", headers=_auth(buyer))).status_code == 404


async def test_update_permissions_over_http(client, make_user, settings):
    from storefront.core.security import create_session_token

    admin = await make_user("boss@example.com", permissions=["ADMIN"])
    target = await make_user("a@example.com")
    token = create_session_token(admin.id, settings)

    resp = await client.put(
        f"/api/users/{target.id}/permissions", json={"permissions": ["USER", "ITEMCREATE"]}, headers=_auth(token)
    )
    assert resp.status_code == 200
    assert resp.json()["permissions"] == ["USER", "ITEMCREATE"]

    bad = await client.put(
        f"/api/users/{target.id}/permissions", json={"permissions": ["ROOT"]}, headers=_auth(token)
    )
    assert bad.status_code == 422

    users = await client.get("/api/users", headers=_auth(token))
    assert len(users.json()) == 2
