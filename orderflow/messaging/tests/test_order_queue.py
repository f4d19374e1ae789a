import threading

import pytest

from orderflow.exceptions import PublishError
from orderflow.messaging import DeliveryLoop, InProcessOrderQueue


def test_publish_and_get_are_fifo():
    queue = InProcessOrderQueue()
    queue.publish("1")
    queue.publish("2")
    assert queue.get(timeout=1) == "1"
    assert queue.get(timeout=1) == "2"


def test_get_returns_none_when_empty():
    assert InProcessOrderQueue().get(timeout=0.01) is None


def test_publish_after_close_fails():
    queue = InProcessOrderQueue()
    queue.close()
    assert queue.closed
    with pytest.raises(PublishError):
        queue.publish("1")


def test_delivery_loop_hands_every_payload_to_the_handler():
    queue = InProcessOrderQueue()
    seen = []
    lock = threading.Lock()

    def handler(payload):
        with lock:
            seen.append(payload)

    loop = DeliveryLoop(queue, handler, workers=3, poll_interval=0.01)
    loop.start()
    for i in range(20):
        queue.publish(str(i))
    loop.drain()
    loop.stop(timeout=5)

    assert sorted(seen, key=int) == [str(i) for i in range(20)]
    assert not loop.running


def test_delivery_loop_survives_handler_errors():
    queue = InProcessOrderQueue()
    handled = []

    def handler(payload):
        if payload == "bad":
            raise RuntimeError("unrecoverable")
        handled.append(payload)

    loop = DeliveryLoop(queue, handler, workers=1, poll_interval=0.01)
    loop.start()
    queue.publish("bad")
    queue.publish("good")
    loop.drain()
    loop.stop(timeout=5)

    assert handled == ["good"]


def test_delivery_loop_needs_a_worker():
    with pytest.raises(ValueError):
        DeliveryLoop(InProcessOrderQueue(), lambda payload: None, workers=0)
