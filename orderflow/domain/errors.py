# orderflow/domain/errors.py
"""Business failures of the checkout workflow.

These are raised inside the checkout transaction and caught at the
OrderService boundary, which rolls back and turns them into a
CheckoutResult. They never reach the HTTP layer as exceptions.
"""

from enum import Enum


class CheckoutErrorKind(str, Enum):
    EMPTY_CART = "empty_cart"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CHECKOUT_IN_PROGRESS = "checkout_in_progress"
    STORAGE_FAILURE = "storage_failure"


class OrderError(Exception):
    kind: CheckoutErrorKind = CheckoutErrorKind.STORAGE_FAILURE


class EmptyCart(OrderError):
    """No line items to check out: cart missing, soft-deleted or empty."""

    kind = CheckoutErrorKind.EMPTY_CART

    def __init__(self, user_id: str):
        super().__init__(f"Cart for user {user_id} is empty or does not exist")
        self.user_id = user_id


class InsufficientStock(OrderError):
    kind = CheckoutErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_id: str, requested: int, available: int | None = None):
        super().__init__(f"Product {product_id} has insufficient stock")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class CheckoutInProgress(OrderError):
    kind = CheckoutErrorKind.CHECKOUT_IN_PROGRESS

    def __init__(self, user_id: str):
        super().__init__(f"Another checkout is in progress for user {user_id}")
        self.user_id = user_id
