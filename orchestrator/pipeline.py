"""High-level coordinator wiring the reader's components together.

The pipeline fetches the identifier list once, builds the shared
:class:`IncrementalList`, and starts a single :class:`Updater` that fills it in
the background while delivering each item over a :class:`DeliveryChannel`.
Observers that want the current state read the same list object the updater
writes to; it is never copied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..config import ReaderConfig
from ..delivery import DeliveryChannel
from ..ingest import HackerNewsClient, ItemSource
from ..models import MaterializedItem
from ..storage import IncrementalList
from .updater import Updater


logger = logging.getLogger(__name__)


@dataclass
class ReaderPipeline:
    """Owns the list, channel, and updater for one reader session."""

    config: ReaderConfig = field(default_factory=ReaderConfig)
    source: Optional[ItemSource] = None
    items: Optional[IncrementalList] = field(default=None, init=False)
    channel: Optional[DeliveryChannel] = field(default=None, init=False)
    updater: Optional[Updater] = field(default=None, init=False)

    def start(self) -> IncrementalList:
        """Fetch identifiers and launch the background updater.

        Returns the shared list so callers can render what is already there.
        """

        if self.updater is not None:
            raise RuntimeError("pipeline already started")

        if self.source is None:
            self.source = HackerNewsClient(
                base_url=self.config.base_url,
                feed=self.config.feed,
                request_timeout=self.config.request_timeout,
            )

        self.items = IncrementalList.from_source(self.source, limit=self.config.limit)
        self.channel = DeliveryChannel(capacity=self.config.channel_capacity)
        self.updater = Updater(
            self.items,
            self.channel,
            fetch_interval=self.config.fetch_interval,
            max_attempts=self.config.max_attempts,
            backoff_seconds=self.config.backoff_seconds,
        )
        logger.info(
            "pipeline.start",
            extra={"feed": self.config.feed, "limit": self.items.limit},
        )
        self.updater.start()
        return self.items

    def deliveries(self) -> Iterator[MaterializedItem]:
        """Yield items as the updater delivers them, until end-of-stream."""

        if self.channel is None:
            raise RuntimeError("pipeline not started")
        return iter(self.channel)

    @property
    def running(self) -> bool:
        return self.updater is not None and self.updater.is_alive()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the updater and close the channel, waiting up to ``timeout``."""

        if self.updater is None:
            return
        self.updater.stop()
        if self.channel is not None:
            self.channel.close()
        self.updater.join(timeout)
        if self.updater.is_alive():
            logger.warning("pipeline.stop.timeout", extra={"timeout": timeout})

    def __enter__(self) -> "ReaderPipeline":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
