# orderflow/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./orderflow.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ORDER_ID_PREFIX = os.getenv("ORDER_ID_PREFIX", "ord_")
ORDER_ITEM_ID_PREFIX = os.getenv("ORDER_ITEM_ID_PREFIX", "oi_")

# decrement products.stock inside the checkout transaction
RESERVE_STOCK_ON_CHECKOUT = _flag("RESERVE_STOCK_ON_CHECKOUT", "true")
ENFORCE_STATUS_TRANSITIONS = _flag("ENFORCE_STATUS_TRANSITIONS", "false")

CHECKOUT_LOCK_ENABLED = _flag("CHECKOUT_LOCK_ENABLED", "false")
CHECKOUT_LOCK_TTL_SECONDS = int(os.getenv("CHECKOUT_LOCK_TTL_SECONDS", 30))

NOTIFICATIONS_ENABLED = _flag("NOTIFICATIONS_ENABLED", "true")
