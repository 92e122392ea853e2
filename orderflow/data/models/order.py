from sqlalchemy import Column, String, DateTime, Numeric, Text
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from orderflow.data.database import Base

class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)

    status = Column(String(32), nullable=False, default="pending")  # pending, processing, completed, cancelled
    total = Column(Numeric(12, 2), nullable=False)
    customer_address = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    items = relationship("OrderItemModel", back_populates="order")
