from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import AppConfig, get_config
from .data.interface import InventoryStore, OrderStore
from .data.seed_data import seed_inventory
from .data.util import get_inventory_store, get_order_store
from .logging import configure_logging, get_logger
from .messaging import DeliveryLoop, InProcessOrderQueue
from .metrics import InMemoryMetrics
from .services import FulfillmentEngine, OrderIntake


@dataclass
class OrderflowApp:
    """Explicitly wired application: stores, queue, metrics, intake, engine and delivery loop."""
    config: AppConfig
    orders: OrderStore
    inventory: InventoryStore
    metrics: InMemoryMetrics
    queue: InProcessOrderQueue
    intake: OrderIntake
    engine: FulfillmentEngine
    delivery: DeliveryLoop

    @classmethod
    def build(cls, config: Optional[AppConfig] = None) -> OrderflowApp:
        config = config or get_config()
        configure_logging(config.log_level)
        logger = get_logger(__name__)

        orders = get_order_store()
        inventory = get_inventory_store(config.inventory_source)
        if config.seed_inventory_on_startup:
            seed_inventory(inventory)

        metrics = InMemoryMetrics()
        queue = InProcessOrderQueue()
        intake = OrderIntake(orders, queue, metrics)
        engine = FulfillmentEngine(
            orders,
            inventory,
            metrics,
            discount_threshold=config.discount_threshold,
            discount_rate=config.discount_rate,
        )
        delivery = DeliveryLoop(
            queue,
            engine.process_order,
            workers=config.delivery_workers,
            poll_interval=config.queue_poll_interval,
        )
        logger.info(f"Application built (env={config.app_env}, inventory={config.inventory_source})")
        return cls(config, orders, inventory, metrics, queue, intake, engine, delivery)

    def start(self) -> None:
        self.delivery.start()

    def stop(self) -> None:
        """Stop accepting orders, finish the queued ones, then stop the workers."""
        self.queue.close()
        if self.delivery.running:
            self.delivery.drain()
        self.delivery.stop()

    def __enter__(self) -> OrderflowApp:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
