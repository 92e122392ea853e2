"""
Shared fixtures: in-memory SQLite schema per test, fake collaborators, seed helpers.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from orderflow.data.database import Base
from orderflow.data.models import (
    CartItemModel,
    CartModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
)
from orderflow.services.order_service import OrderService


class FakeIds:
    """Deterministic id generator: ord_1, oi_1, oi_2, ... one counter per prefix."""

    def __init__(self):
        self.counters = {}

    def __call__(self, prefix: str = "") -> str:
        counter = self.counters.setdefault(prefix, count(1))
        return f"{prefix}{next(counter)}"


class FakeClock:
    """Every call returns a moment one minute after the previous one."""

    def __init__(self, start=datetime(2026, 3, 10, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id):
        self.sent.append((user_id, order_id))
        return True


class FakeLock:
    def __init__(self, acquire_result=True, error=None):
        self.acquire_result = acquire_result
        self.error = error
        self.acquired = []
        self.released = []

    def acquire_checkout_lock(self, user_id, token, ttl):
        if self.error is not None:
            raise self.error
        self.acquired.append((user_id, token, ttl))
        return self.acquire_result

    def release_checkout_lock(self, user_id, token):
        self.released.append((user_id, token))
        return True


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def ids():
    return FakeIds()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def make_lock():
    return FakeLock


@pytest.fixture
def service(db, ids, clock, notifier):
    return OrderService(db, id_factory=ids, clock=clock, notifier=notifier, reserve_stock=True, strict_status=False)


@pytest.fixture
def add_product(db):
    def _add(product_id, price, stock, title=None):
        db.add(ProductModel(id=product_id, title=title or f"Product {product_id}", price=Decimal(str(price)), stock=stock))
        db.commit()

    return _add


@pytest.fixture
def add_cart(db):
    """add_cart("u1", [("p1", 2), ("p2", 1)]) -> cart id"""

    def _add(user_id, lines, cart_id=None, deleted=False):
        cart_id = cart_id or f"cart_{user_id}"
        db.add(CartModel(
            id=cart_id,
            user_id=user_id,
            deleted_at=datetime(2026, 1, 1) if deleted else None,
        ))
        for n, (product_id, quantity) in enumerate(lines, start=1):
            db.add(CartItemModel(id=f"{cart_id}_item{n}", cart_id=cart_id, product_id=product_id, quantity=quantity))
        db.commit()
        return cart_id

    return _add


@pytest.fixture
def add_order(db):
    """Inserts an order header directly, for read-path and analytics tests."""

    def _add(order_id, user_id="u1", total="10.00", status="pending", created_at=None, items=()):
        db.add(OrderModel(
            id=order_id,
            user_id=user_id,
            total=Decimal(total),
            status=status,
            customer_address="1 Main St",
            created_at=created_at or datetime(2026, 3, 1, 9, 0, 0),
        ))
        for n, (product_id, quantity, price) in enumerate(items, start=1):
            db.add(OrderItemModel(
                id=f"{order_id}_oi{n}",
                order_id=order_id,
                product_id=product_id,
                quantity=quantity,
                price=Decimal(str(price)),
            ))
        db.commit()

    return _add


@pytest.fixture
def count_rows(db):
    def _count(model):
        return db.query(model).count()

    return _count


@pytest.fixture
def file_engine(tmp_path):
    """File-backed SQLite so two sessions see each other's commits on separate connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def open_session(file_engine):
    sessions = []

    def _open():
        session = sessionmaker(bind=file_engine, autoflush=False)()
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()
