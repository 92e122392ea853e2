# orderflow/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from orderflow.data.database import get_db
from orderflow.domain.errors import CheckoutErrorKind
from orderflow.domain.schemas import (
    OrderCreate,
    OrderCreated,
    OrderHistoryOut,
    OrderItemOut,
    OrderOut,
    OrderStatus,
    StatusUpdate,
)
from orderflow.services.lock_service import LockService
from orderflow.services.notification_service import NotificationService
from orderflow.services.order_service import OrderService
from orderflow.utils import settings

router = APIRouter(prefix="/orders", tags=["orders"])

_HTTP_STATUS = {
    CheckoutErrorKind.EMPTY_CART: 400,
    CheckoutErrorKind.INSUFFICIENT_STOCK: 409,
    CheckoutErrorKind.CHECKOUT_IN_PROGRESS: 409,
    CheckoutErrorKind.STORAGE_FAILURE: 500,
}


def get_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(
        db=db,
        notifier=NotificationService() if settings.NOTIFICATIONS_ENABLED else None,
        lock_service=LockService() if settings.CHECKOUT_LOCK_ENABLED else None,
    )


@router.post("/", response_model=OrderCreated, status_code=201)
def create_order(payload: OrderCreate, svc: OrderService = Depends(get_service)):
    """
    Checkout: turns the user's cart into a pending order.
    """
    result = svc.create_order_from_cart(payload.user_id, payload.address)
    if not result.ok:
        raise HTTPException(
            status_code=_HTTP_STATUS[result.error],
            detail={
                "error": result.error.value,
                "message": result.message,
                "product_id": result.product_id,
            },
        )
    return {"id": result.order_id, "status": OrderStatus.PENDING.value}


@router.get("/history", response_model=List[OrderHistoryOut])
def order_history(user_id: str = Query(...), svc: OrderService = Depends(get_service)):
    return svc.get_order_history(user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user_id: str = Query(...),
    svc: OrderService = Depends(get_service),
):
    order = svc.get_order_by_id(user_id, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/{order_id}/items", response_model=List[OrderItemOut])
def get_order_items(order_id: str, svc: OrderService = Depends(get_service)):
    return svc.get_order_items(order_id)


@router.patch("/{order_id}/status", response_model=OrderCreated)
def update_status(
    order_id: str,
    payload: StatusUpdate,
    svc: OrderService = Depends(get_service),
):
    if not svc.update_order_status(order_id, payload.status):
        raise HTTPException(status_code=404, detail="Order not found or status change rejected")
    return {"id": order_id, "status": payload.status}
