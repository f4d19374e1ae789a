"""
Command line entry point.

Run:
  python -m orderflow seed --out sample_data
  python -m orderflow demo
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .app import OrderflowApp
from .data import seed_data

DEMO_REQUESTS = [
    {"customer_id": "C1", "items": [{"product_code": "SKU-001", "quantity": 2, "price": "49.99"}],
     "total_amount": "99.98"},
    {"customer_id": "C2", "items": [{"product_code": "SKU-001", "quantity": 5, "price": "49.99"}],
     "total_amount": "249.95"},
    {"customer_id": "C3", "items": [{"product_code": "UNKNOWN-SKU", "quantity": 1, "price": "10.00"}],
     "total_amount": "10.00"},
]


def run_demo(args: argparse.Namespace) -> int:
    with OrderflowApp.build() as app:
        receipts = [app.intake.create_order(r) for r in DEMO_REQUESTS]
        for receipt in receipts:
            print(f"Order {receipt.order_id} for {receipt.customer_id}: {receipt.status.value} ({receipt.message})")
        app.delivery.drain()

    for order in app.intake.list_orders():
        print(
            f"Order {order.id}: status={order.status.value} "
            f"total={order.total_amount} discount={order.state.discount}"
        )
    print(f"Counters: {app.metrics.snapshot()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="orderflow", description="Order intake and fulfillment")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Write sample inventory.csv")
    seed_data.add_arguments(seed)
    seed.set_defaults(func=seed_data.run)

    demo = sub.add_parser("demo", help="Submit sample orders and print their final status")
    demo.set_defaults(func=run_demo)

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
