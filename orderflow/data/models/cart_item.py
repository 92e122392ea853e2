from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from orderflow.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(String(64), primary_key=True)
    cart_id = Column(String(64), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(64), ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),)
