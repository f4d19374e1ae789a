import contextlib
from decimal import Decimal

import pytest
from loguru import logger

from orderflow.config import set_config_for_test
from orderflow.data.backends.memory_backend import InMemoryInventoryStore, InMemoryOrderStore
from orderflow.data.models import Order, OrderItem
from orderflow.data.seed_data import seed_inventory
from orderflow.metrics import InMemoryMetrics
from orderflow.services import FulfillmentEngine

CONFIG_ENV_VARS = [
    "APP_ENV", "LOG_LEVEL", "DATA_DIR", "INVENTORY_SOURCE", "SEED_INVENTORY_ON_STARTUP",
    "DISCOUNT_THRESHOLD", "DISCOUNT_RATE", "DELIVERY_WORKERS", "QUEUE_POLL_INTERVAL",
]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test(log_level="DEBUG")
    yield


@pytest.fixture
def metrics():
    return InMemoryMetrics()


@pytest.fixture
def order_store():
    return InMemoryOrderStore()


@pytest.fixture
def inventory_store():
    store = InMemoryInventoryStore()
    seed_inventory(store)
    return store


@pytest.fixture
def make_order(order_store):
    """Persist a PENDING order built from (product_code, quantity, price) tuples."""
    def _make(items, total_amount, customer_id="C1"):
        order = Order(
            customer_id=customer_id,
            items=[OrderItem(product_code=c, quantity=q, price=Decimal(p)) for c, q, p in items],
            total_amount=Decimal(total_amount),
            created_at="2026-01-01T00:00:00Z",
        )
        return order_store.persist(order)
    return _make


@pytest.fixture
def engine(order_store, inventory_store, metrics):
    return FulfillmentEngine(order_store, inventory_store, metrics)


@pytest.fixture
def log_records():
    """Log records captured by a test sink for the duration of a test."""
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    with contextlib.suppress(ValueError):
        logger.remove(sink_id)
