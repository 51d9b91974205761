from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        # One row per (user, item); repeat adds bump quantity instead.
        UniqueConstraint("user_id", "item_id", name="uq_cart_items_user_item"),
        CheckConstraint("quantity > 0", name="quantity_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id", ondelete="CASCADE"), index=True, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    user = relationship("User", back_populates="cart")
    item = relationship("Item", back_populates="cart_items")
