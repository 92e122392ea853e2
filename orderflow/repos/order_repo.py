# orderflow/repos/order_repo.py
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orderflow.data.models.order import OrderModel
from orderflow.data.models.order_item import OrderItemModel
from orderflow.data.models.product import ProductModel
from orderflow.utils.retry import db_retry


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    # writes: no commit here, the service owns the transaction

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_items(self, items: list[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def update_order_status(
        self, order_id: str, status: str, updated_at: datetime, expected_status: str | None = None
    ) -> int:
        """With expected_status the write only happens if nobody changed the status in between."""
        stmt = update(OrderModel).where(OrderModel.id == order_id)
        if expected_status is not None:
            stmt = stmt.where(OrderModel.status == expected_status)

        result = self.db.execute(stmt.values(status=status, updated_at=updated_at))
        return result.rowcount

    # reads

    @db_retry()
    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    @db_retry()
    def get_order_for_user(self, user_id: str, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()

    @db_retry()
    def get_history_rows(self, user_id: str) -> list[dict]:
        """One row per order item, or one row with null item columns for an order without items."""
        stmt = (
            select(
                OrderModel.id.label("order_id"),
                OrderModel.total,
                OrderModel.status,
                OrderModel.customer_address,
                OrderModel.created_at,
                OrderItemModel.id.label("order_item_id"),
                OrderItemModel.quantity,
                OrderItemModel.price.label("item_price"),
                OrderItemModel.product_id,
                ProductModel.title.label("product_name"),
            )
            .select_from(OrderModel)
            .outerjoin(OrderItemModel, OrderItemModel.order_id == OrderModel.id)
            .outerjoin(ProductModel, ProductModel.id == OrderItemModel.product_id)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc(), OrderItemModel.id)
        )
        return [dict(row) for row in self.db.execute(stmt).mappings().all()]

    @db_retry()
    def get_order_items(self, order_id: str) -> list[dict]:
        stmt = (
            select(
                OrderItemModel.id,
                OrderItemModel.product_id,
                OrderItemModel.quantity,
                OrderItemModel.price,
                ProductModel.title.label("name"),
            )
            .join(ProductModel, ProductModel.id == OrderItemModel.product_id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.id)
        )
        return [dict(row) for row in self.db.execute(stmt).mappings().all()]

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
