from __future__ import annotations

from typing import Awaitable, Callable

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_db, get_mailer, get_payment_gateway
from storefront.core.config import Settings, get_settings
from storefront.core.db import make_sessionmaker
from storefront.core.errors import GatewayError
from storefront.core.security import hash_password
from storefront.main import create_app
from storefront.models.base import Base
from storefront.models.item import Item
from storefront.models.user import User
from storefront.services.payments import Charge

PASSWORD = "hunter22"


class FakeGateway:
    def __init__(self, *, fail: bool = False, adjust: int = 0, on_charge: Callable[[], Awaitable[None]] | None = None):
        self.fail = fail
        self.adjust = adjust
        self.on_charge = on_charge
        self.calls: list[dict] = []

    async def charge(self, *, amount: int, currency: str, source: str) -> Charge:
        self.calls.append({"amount": amount, "currency": currency, "source": source})
        if self.on_charge is not None:
            await self.on_charge()
        if self.fail:
            raise GatewayError("Your card was declined.")
        return Charge(id=f"ch_test_{len(self.calls)}", amount=amount + self.adjust)


class FakeMailer:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.sent: list[dict] = []

    async def send(self, *, from_addr: str, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append({"from": from_addr, "to": to, "subject": subject, "html": html})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="test",
        JWT_SECRET_KEY="test-secret",
        DATABASE_URL="sqlite+aiosqlite://",
        FRONTEND_URL="http://shop.test",
        STRIPE_SECRET_KEY=None,
    )


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_maker(engine):
    return make_sessionmaker(engine)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def make_user(db):
    async def _make(email: str = "wes@example.com", permissions: list[str] | None = None, name: str = "") -> User:
        user = User(
            email=email,
            name=name,
            password_hash=hash_password(PASSWORD),
            permissions=list(permissions if permissions is not None else ["USER"]),
        )
        db.add(user)
        await db.commit()
        return user

    return _make


@pytest.fixture
def make_item(db):
    async def _make(owner: User, price: int = 1000, title: str = "Item") -> Item:
        item = Item(
            user_id=owner.id,
            title=title,
            description=f"{title} description",
            price=price,
            image=f"https://img.test/{title}.jpg",
            large_image=f"https://img.test/{title}-large.jpg",
        )
        db.add(item)
        await db.commit()
        return item

    return _make


@pytest.fixture
async def client(settings, session_maker, gateway, mailer):
    app = create_app(settings)

    async def _db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_mailer] = lambda: mailer

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
