# orderflow/services/notification_service.py
from orderflow.celery_worker import celery_app
from orderflow.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Sends "order placed" notifications through Celery.
    Called only after the checkout transaction has committed.
    """

    def send_order_notification(self, user_id: str, order_id: str) -> bool:
        try:
            send_order_notification_task.delay(user_id, order_id)
        except Exception as e:
            # the order exists either way; a lost notification must not fail checkout
            logger.warning(f"Could not queue notification for order {order_id}: {e}")
            return False
        return True


@celery_app.task(name="orderflow.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str):
    """Worker side. Delivery channel (email, push) is plugged in here."""
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
