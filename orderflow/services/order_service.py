# orderflow/services/order_service.py
from typing import Callable
from datetime import datetime

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from orderflow.data.models.order import OrderModel
from orderflow.data.models.order_item import OrderItemModel
from orderflow.domain.errors import (
    CheckoutErrorKind,
    CheckoutInProgress,
    EmptyCart,
    InsufficientStock,
    OrderError,
)
from orderflow.domain.schemas import ALLOWED_TRANSITIONS, CheckoutResult, OrderStatus
from orderflow.repos.cart_repo import CartRepo
from orderflow.repos.order_repo import OrderRepo
from orderflow.services.pricing import calculate_order_total, validate_availability
from orderflow.utils import settings
from orderflow.utils.ids import new_id, utcnow
from orderflow.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order workflow: checkout (cart -> order), status updates and order queries.

    The session is passed in per request; the service owns its transaction
    boundaries (commit on success, rollback on any failure).
    """

    def __init__(
        self,
        db: Session,
        id_factory: Callable[[str], str] = new_id,
        clock: Callable[[], datetime] = utcnow,
        notifier=None,
        lock_service=None,
        reserve_stock: bool | None = None,
        strict_status: bool | None = None,
    ):
        self.db = db
        self.cart_repo = CartRepo(db)
        self.repo = OrderRepo(db)
        self.id_factory = id_factory
        self.clock = clock
        self.notifier = notifier
        self.lock_service = lock_service
        self.reserve_stock = settings.RESERVE_STOCK_ON_CHECKOUT if reserve_stock is None else reserve_stock
        self.strict_status = settings.ENFORCE_STATUS_TRANSITIONS if strict_status is None else strict_status

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_order_from_cart(self, user_id: str, address: str) -> CheckoutResult:
        """
        Checkout. Never raises for business or storage failures.

        1. reads the cart lines with product rows locked
        2. validates stock
        3. computes the total
        4. inserts the order and one item per line
        5. reserves stock (conditional decrement)
        6. clears the cart
        All of it commits together or not at all. Not idempotent: callers
        must not retry blindly.
        """
        token = None
        try:
            token = self._acquire_guard(user_id)
            order_id = self._place_order(user_id, address)
            self.repo.commit()
        except OrderError as e:
            self.repo.rollback()
            logger.warning(f"Order creation failed for user {user_id}: {e.kind.value}: {e}")
            return CheckoutResult.failure(e.kind, str(e), product_id=getattr(e, "product_id", None))
        except (SQLAlchemyError, RedisError):
            self.repo.rollback()
            logger.exception(f"Order creation failed for user {user_id}: storage error")
            return CheckoutResult.failure(CheckoutErrorKind.STORAGE_FAILURE, "Order could not be created")
        finally:
            if token is not None:
                self._release_guard(user_id, token)

        logger.info(f"Order {order_id} created for user {user_id}")
        if self.notifier is not None:
            self.notifier.send_order_notification(user_id, order_id)

        return CheckoutResult.success(order_id)

    def _place_order(self, user_id: str, address: str) -> str:
        lines = self.cart_repo.get_cart_with_items(user_id, for_update=True)
        if not lines:
            raise EmptyCart(user_id)

        validate_availability(lines)
        total = calculate_order_total(lines)

        order = OrderModel(
            id=self.id_factory(settings.ORDER_ID_PREFIX),
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total=total,
            customer_address=address,
            created_at=self.clock(),
        )
        self.repo.add_order(order)

        self.repo.add_items([
            OrderItemModel(
                id=self.id_factory(settings.ORDER_ITEM_ID_PREFIX),
                order_id=order.id,
                product_id=line["product_id"],
                quantity=line["quantity"],
                price=line["price"],
            )
            for line in lines
        ])

        if self.reserve_stock:
            # re-check under the same transaction; a concurrent checkout may have won
            for line in lines:
                if not self.cart_repo.reserve_stock(line["product_id"], line["quantity"]):
                    raise InsufficientStock(line["product_id"], line["quantity"])

        for cart_id in dict.fromkeys(line["cart_id"] for line in lines):
            self.cart_repo.clear_cart(cart_id)

        return order.id

    def _acquire_guard(self, user_id: str) -> str | None:
        if self.lock_service is None:
            return None

        token = self.id_factory("chk_")
        if not self.lock_service.acquire_checkout_lock(user_id, token, settings.CHECKOUT_LOCK_TTL_SECONDS):
            raise CheckoutInProgress(user_id)
        return token

    def _release_guard(self, user_id: str, token: str) -> None:
        try:
            self.lock_service.release_checkout_lock(user_id, token)
        except RedisError as e:
            # the key expires on its own
            logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    def update_order_status(self, order_id: str, status: str) -> bool:
        """
        Set status and updated_at. False when the order does not exist, the
        write fails, or (strict mode only) the transition is not allowed.
        """
        expected_status = None
        try:
            if self.strict_status:
                order = self.repo.get_order(order_id)
                if order is None:
                    return False
                if status not in ALLOWED_TRANSITIONS.get(order.status, set()):
                    logger.warning(f"Rejected status change of order {order_id}: {order.status} -> {status}")
                    return False

                expected_status = order.status

            rowcount = self.repo.update_order_status(order_id, status, self.clock(), expected_status=expected_status)
            self.repo.commit()
        except SQLAlchemyError:
            self.repo.rollback()
            logger.exception(f"Status update failed for order {order_id}")
            return False

        if rowcount:
            logger.info(f"Order {order_id} status -> {status}")
        elif expected_status is not None:
            logger.warning(f"Order {order_id} left {expected_status} concurrently, {status} not applied")
        return rowcount > 0

    # =====================================================
    # QUERIES
    # =====================================================
    def get_order_by_id(self, user_id: str, order_id: str) -> dict | None:
        order = self.repo.get_order_for_user(user_id, order_id)
        if not order:
            return None

        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status,
            "total": order.total,
            "customer_address": order.customer_address,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }

    def get_order_history(self, user_id: str) -> list[dict]:
        """Orders newest first, items nested. item_count is the sum of quantities."""
        orders: dict[str, dict] = {}

        for row in self.repo.get_history_rows(user_id):
            entry = orders.get(row["order_id"])
            if entry is None:
                entry = orders[row["order_id"]] = {
                    "id": row["order_id"],
                    "total": row["total"],
                    "status": row["status"],
                    "customer_address": row["customer_address"],
                    "created_at": row["created_at"],
                    "items": [],
                    "item_count": 0,
                }

            # left join: an order without items comes back as a single row of nulls
            if row["order_item_id"] is None:
                continue

            entry["items"].append({
                "id": row["order_item_id"],
                "product_id": row["product_id"],
                "name": row["product_name"],
                "quantity": int(row["quantity"]),
                "price": row["item_price"],
            })
            entry["item_count"] += int(row["quantity"])

        return list(orders.values())

    def get_order_items(self, order_id: str) -> list[dict]:
        return [
            {
                "id": row["id"],
                "product_id": row["product_id"],
                "name": row["name"],
                "quantity": int(row["quantity"]),
                "price": row["price"],
            }
            for row in self.repo.get_order_items(order_id)
        ]
