"""Background worker that materializes identifiers one at a time.

The updater is the sole writer of an :class:`IncrementalList`. Each iteration
advances the list by one item and pushes it onto the delivery channel, then
waits a fixed interval so the remote service sees a bounded request rate. A
failed fetch leaves the cursor in place and is retried on the next iteration;
after ``max_attempts`` consecutive failures on the same identifier a
placeholder item is committed instead, so one bad item cannot stall the feed.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from ..delivery.channel import DeliveryChannel
from ..errors import ChannelClosed, FetchError, ReaderError
from ..models import MaterializedItem
from ..storage.incremental_list import IncrementalList


logger = logging.getLogger(__name__)


@dataclass
class UpdaterReport:
    """Counters describing what the updater has done so far."""

    fetched: int = 0
    failures: int = 0
    placeholders: int = 0
    delivered: int = 0
    stopped_reason: Optional[str] = None


class Updater(threading.Thread):
    def __init__(
        self,
        items: IncrementalList,
        channel: DeliveryChannel,
        fetch_interval: float = 0.5,
        max_attempts: int = 5,
        backoff_seconds: float = 1.0,
    ) -> None:
        super().__init__(name="hn-updater")
        self.daemon = True
        self._items = items
        self._channel = channel
        self._fetch_interval = fetch_interval
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._stop_event = threading.Event()
        self.report = UpdaterReport()

    def stop(self) -> None:
        """Ask the loop to exit; an in-flight fetch is allowed to finish.

        The channel is closed as well so a ``send`` blocked on a full channel
        returns instead of waiting for a consumer that may never read.
        """

        self._stop_event.set()
        self._channel.close()

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def run(self) -> None:
        try:
            self.report.stopped_reason = self._loop()
        except ReaderError as exc:
            self.report.stopped_reason = "failed"
            logger.error(
                "updater.failed",
                extra={"position": self._items.cursor, "error": str(exc), "error_type": type(exc).__name__},
            )
        finally:
            self._channel.close()
            logger.info(
                "updater.stopped",
                extra={
                    "reason": self.report.stopped_reason,
                    "fetched": self.report.fetched,
                    "failures": self.report.failures,
                    "placeholders": self.report.placeholders,
                    "delivered": self.report.delivered,
                },
            )

    def _loop(self) -> str:
        attempts = 0
        while True:
            if self._stop_event.is_set():
                return "stopped"
            if self._items.is_filled():
                return "filled"

            delay = self._fetch_interval
            try:
                item = self._items.advance_one()
                self.report.fetched += 1
                attempts = 0
            except FetchError as exc:
                attempts += 1
                self.report.failures += 1
                item = self._on_failure(exc, attempts)
                if item is None:
                    delay += self._backoff_seconds * attempts
                else:
                    attempts = 0

            if item is not None and not self._deliver(item):
                return "stopped" if self._stop_event.is_set() else "channel_closed"

            if self._items.is_filled():
                continue
            if self._stop_event.wait(delay):
                return "stopped"

    def _on_failure(self, exc: FetchError, attempts: int) -> Optional[MaterializedItem]:
        position = self._items.cursor
        if self._max_attempts and attempts >= self._max_attempts:
            item = self._items.advance_with_placeholder()
            self.report.placeholders += 1
            logger.error(
                "hackernews.item.skipped",
                extra={
                    "position": position,
                    "identifier": item.identifier,
                    "attempts": attempts,
                    "error": str(exc),
                },
            )
            return item

        logger.warning(
            "hackernews.item.retry",
            extra={
                "position": position,
                "attempt": attempts,
                "max_attempts": self._max_attempts,
                "error": str(exc),
                "url": exc.url,
            },
        )
        return None

    def _deliver(self, item: MaterializedItem) -> bool:
        try:
            self._channel.send(item)
        except ChannelClosed:
            logger.info("updater.consumer_gone", extra={"position": item.position})
            return False
        self.report.delivered += 1
        return True
