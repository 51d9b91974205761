from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import JSON, String, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # Reset token and expiry are written and cleared together.
        CheckConstraint(
            "(reset_token IS NULL AND reset_token_expiry IS NULL) "
            "OR (reset_token IS NOT NULL AND reset_token_expiry IS NOT NULL)",
            name="reset_token_pair",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    permissions: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    reset_token: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    reset_token_expiry: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    items = relationship("Item", back_populates="user")
    cart = relationship("CartItem", back_populates="user", cascade="all,delete-orphan", order_by="CartItem.id")
    orders = relationship("Order", back_populates="user", order_by="Order.id")
