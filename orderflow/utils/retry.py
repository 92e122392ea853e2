# orderflow/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from sqlalchemy.exc import OperationalError
import redis


def _rollback_repo_session(retry_state):
    # a failed statement leaves the session unusable until rollback
    repo = retry_state.args[0] if retry_state.args else None
    db = getattr(repo, "db", None)
    if db is not None:
        db.rollback()


def db_retry():
    """For read-only repo methods. Checkout is never retried."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OperationalError),
        before_sleep=_rollback_repo_session,
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
