from sqlalchemy import Column, Integer, String, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from orderflow.data.database import Base


class OrderItemModel(Base):
    """Immutable line of a placed order. `price` is the unit price at checkout time."""

    __tablename__ = "order_items"

    id = Column(String(64), primary_key=True)
    order_id = Column(String(64), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(64), ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(12, 4), nullable=False)

    order = relationship("OrderModel", back_populates="items")
