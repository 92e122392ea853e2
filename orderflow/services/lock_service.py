import redis

from orderflow.utils.settings import REDIS_URL
from orderflow.utils.retry import redis_retry
from orderflow.utils.logging import get_logger

logger = get_logger(__name__)

# compare-and-delete in one step, so we never drop a guard taken by another attempt
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Checkout guard: one in-flight checkout per user.
    The key expires on its own, so a crashed worker cannot block the user for longer than ttl.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: str) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: str, token: str, ttl: int) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        # SET checkout:<user>:lock <token> NX EX <ttl>
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_checkout_lock(self, user_id: str, token: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
