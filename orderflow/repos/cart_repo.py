# orderflow/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from orderflow.data.models.cart import CartModel
from orderflow.data.models.cart_item import CartItemModel
from orderflow.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_with_items(self, user_id: str, for_update: bool = False) -> list[dict]:
        """
        Cart lines of the user's active cart with live product price and stock.

        Missing cart, soft-deleted cart and empty cart all give [].
        Lines come back in join order, no re-sorting by id.
        With for_update the product rows are locked until the transaction ends.
        """
        stmt = (
            select(
                CartModel.id.label("cart_id"),
                CartItemModel.id.label("item_id"),
                CartItemModel.product_id,
                CartItemModel.quantity,
                ProductModel.price,
                ProductModel.stock,
            )
            .join(CartItemModel, CartItemModel.cart_id == CartModel.id)
            .join(ProductModel, ProductModel.id == CartItemModel.product_id)
            .where(CartModel.user_id == user_id, CartModel.deleted_at.is_(None))
        )
        if for_update:
            stmt = stmt.with_for_update(of=ProductModel)

        return [dict(row) for row in self.db.execute(stmt).mappings().all()]

    def reserve_stock(self, product_id: str, quantity: int) -> bool:
        """Conditional decrement. False means the stock was gone by the time we wrote."""
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
        )
        return result.rowcount == 1

    def clear_cart(self, cart_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.cart_id == cart_id)
        )
        return result.rowcount
