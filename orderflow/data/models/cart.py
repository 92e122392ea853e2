#orderflow/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from orderflow.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)

    # soft delete; deleted carts are invisible to checkout
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
    )
