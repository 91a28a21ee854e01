import queue
import threading
import time

import pytest

from hnreader.delivery import DeliveryChannel
from hnreader.errors import ChannelClosed
from hnreader.models import MaterializedItem


def _item(position: int) -> MaterializedItem:
    return MaterializedItem.placeholder(position, 1000 + position)


def test_fifo_order_and_end_of_stream_after_drain() -> None:
    channel = DeliveryChannel(capacity=5, poll_interval=0.01)
    for i in range(3):
        channel.send(_item(i))
    channel.close()

    assert [item.position for item in channel] == [0, 1, 2]
    assert channel.receive() is None


def test_send_on_closed_channel_raises() -> None:
    channel = DeliveryChannel(capacity=1, poll_interval=0.01)
    channel.close()
    with pytest.raises(ChannelClosed):
        channel.send(_item(0))


def test_full_channel_blocks_sender_until_consumer_takes() -> None:
    channel = DeliveryChannel(capacity=1, poll_interval=0.01)
    channel.send(_item(0))
    sent = threading.Event()

    def producer() -> None:
        channel.send(_item(1))
        sent.set()

    t = threading.Thread(target=producer, daemon=True)
    t.start()
    assert not sent.wait(0.1)

    assert channel.receive().position == 0
    assert sent.wait(2.0)
    assert channel.receive().position == 1
    t.join(1.0)


def test_closing_wakes_blocked_sender() -> None:
    channel = DeliveryChannel(capacity=1, poll_interval=0.01)
    channel.send(_item(0))
    errors: list = []

    def producer() -> None:
        try:
            channel.send(_item(1))
        except ChannelClosed as exc:
            errors.append(exc)

    t = threading.Thread(target=producer, daemon=True)
    t.start()
    time.sleep(0.05)
    channel.close()
    t.join(2.0)

    assert not t.is_alive()
    assert len(errors) == 1


def test_receive_blocks_until_item_arrives() -> None:
    channel = DeliveryChannel(capacity=2, poll_interval=0.01)
    timer = threading.Timer(0.05, channel.send, args=(_item(7),))
    timer.start()
    try:
        assert channel.receive(timeout=2.0).position == 7
    finally:
        timer.cancel()


def test_receive_timeout_raises_empty() -> None:
    channel = DeliveryChannel(capacity=2, poll_interval=0.01)
    with pytest.raises(queue.Empty):
        channel.receive(timeout=0.05)


def test_close_racing_a_send_is_reported_to_the_sender(monkeypatch) -> None:  # noqa: ANN001
    channel = DeliveryChannel(capacity=4, poll_interval=0.01)
    put = channel._queue.put

    def put_then_close(item, timeout=None):  # noqa: ANN001, ANN202
        put(item, timeout=timeout)
        channel.close()

    monkeypatch.setattr(channel._queue, "put", put_then_close)

    with pytest.raises(ChannelClosed):
        channel.send(_item(0))
    assert channel.closed


def test_close_is_idempotent() -> None:
    channel = DeliveryChannel()
    channel.close()
    channel.close()
    assert channel.closed


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DeliveryChannel(capacity=0)
