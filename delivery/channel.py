"""Bounded hand-off of materialized items from the updater to a consumer.

The channel wraps a ``queue.Queue`` with a closed flag. Either side may close
it: the producer closes once the list is filled so the consumer sees
end-of-stream after draining, and the consumer closes when it goes away so the
producer's next ``send`` fails with ``ChannelClosed``. Blocking calls poll the
closed flag at ``poll_interval`` so neither side waits forever on a peer that
has left.
"""

from __future__ import annotations

import queue
import threading
from typing import Iterator, Optional

from ..errors import ChannelClosed
from ..models import MaterializedItem


DEFAULT_CAPACITY = 100


class DeliveryChannel:
    def __init__(self, capacity: int = DEFAULT_CAPACITY, poll_interval: float = 0.1) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._queue: queue.Queue[MaterializedItem] = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()
        self._poll_interval = poll_interval
        self.capacity = capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        self._closed.set()

    def send(self, item: MaterializedItem) -> None:
        """Enqueue ``item``, blocking while the channel is full.

        Raises:
            ChannelClosed: If the channel is closed before the item is accepted,
                or is closed while the put lands. In the latter case the item
                sits in the queue but is not counted as delivered.
        """

        while True:
            if self._closed.is_set():
                raise ChannelClosed("delivery channel is closed")
            try:
                self._queue.put(item, timeout=self._poll_interval)
            except queue.Full:
                continue
            if self._closed.is_set():
                raise ChannelClosed("delivery channel closed during send")
            return

    def receive(self, timeout: Optional[float] = None) -> Optional[MaterializedItem]:
        """Return the next item, or ``None`` once closed and drained.

        Raises:
            queue.Empty: If ``timeout`` elapses with nothing to return.
        """

        waited = 0.0
        while True:
            try:
                return self._queue.get(timeout=self._poll_interval)
            except queue.Empty:
                pass

            if self._closed.is_set():
                # The producer may have sent one last item before closing.
                try:
                    return self._queue.get_nowait()
                except queue.Empty:
                    return None

            waited += self._poll_interval
            if timeout is not None and waited >= timeout:
                raise queue.Empty

    def __iter__(self) -> Iterator[MaterializedItem]:
        while True:
            item = self.receive()
            if item is None:
                return
            yield item

    def __len__(self) -> int:
        return self._queue.qsize()
