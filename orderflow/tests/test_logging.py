import contextlib

import pytest
from loguru import logger

from orderflow.app import OrderflowApp
from orderflow.config import get_config
from orderflow.logging import configure_logging, get_logger
from orderflow.services import FulfillmentEngine


@pytest.fixture
def early_records():
    """Records from a sink installed before any application component exists."""
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    with contextlib.suppress(ValueError):
        logger.remove(sink_id)


def test_building_components_keeps_existing_sinks(early_records, order_store, inventory_store, metrics):
    engine = FulfillmentEngine(order_store, inventory_store, metrics)
    get_logger("another.module")

    engine.process_order("not-a-number")

    assert any("Invalid order ID received" in r["message"] for r in early_records)


def test_building_the_app_keeps_existing_sinks(early_records):
    app = OrderflowApp.build(get_config())
    app.intake.list_orders()
    get_logger(__name__).info("after build")

    assert any(r["message"] == "after build" for r in early_records)


def test_reconfiguring_keeps_existing_sinks(early_records):
    configure_logging("WARNING")
    configure_logging()
    get_logger(__name__).debug("still captured")

    assert any(r["message"] == "still captured" for r in early_records)


def test_logger_is_bound_to_name(early_records):
    get_logger("orderflow.example").info("hello")

    record = next(r for r in early_records if r["message"] == "hello")
    assert record["extra"]["name"] == "orderflow.example"
