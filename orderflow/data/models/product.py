#orderflow/data/models/product.py
from sqlalchemy import Column, String, Integer, Numeric, CheckConstraint

from orderflow.data.database import Base


class ProductModel(Base):
    """Catalog row. Owned by the catalog service; checkout only reads price and decrements stock."""

    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False)

    # 4 places so sub-cent unit prices survive until the order total is rounded
    price = Column(Numeric(12, 4), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)
