"""Thread-safe, append-only store of items materialized from an identifier list.

The list is filled front to back: ``cursor`` points at the next identifier
awaiting materialization, and ``materialized`` always holds exactly ``cursor``
items whose positions match their index. A single lock guards the mutable
state; it is held only to snapshot or to append-and-advance, never across a
network call, so readers are not blocked by remote latency.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, List, Optional, Sequence, Tuple

from ..errors import ConcurrentAdvance, Exhausted, FetchError, IndexOutOfRange
from ..ingest.hackernews import ItemSource
from ..models import MaterializedItem


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 11


class IncrementalList:
    """Ordered identifiers plus the prefix of them fetched so far.

    Only the updater should call :meth:`advance_one` and
    :meth:`advance_with_placeholder`; any number of threads may read through
    :meth:`iterate`, :meth:`is_filled`, and the properties.
    """

    def __init__(
        self,
        identifiers: Sequence[int],
        source: ItemSource,
        limit: Optional[int] = None,
    ) -> None:
        if limit is None:
            limit = len(identifiers)
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._limit = min(limit, len(identifiers))
        self._identifiers: Tuple[int, ...] = tuple(identifiers[: self._limit])
        self._source = source
        self._materialized: List[MaterializedItem] = []
        self._cursor = 0
        self._lock = threading.Lock()

    @classmethod
    def from_source(cls, source: ItemSource, limit: Optional[int] = DEFAULT_LIMIT) -> "IncrementalList":
        """Fetch the identifier list and build a list over it.

        A failed fetch degrades to an empty list that is filled from the
        start, so the caller keeps running with nothing to show.
        """

        try:
            identifiers = source.fetch_identifier_list()
        except FetchError as exc:
            logger.error(
                "incremental_list.identifiers.failed",
                extra={"error": str(exc), "url": exc.url},
            )
            return cls((), source, limit=0)

        items = cls(identifiers, source, limit=limit)
        logger.info(
            "incremental_list.created",
            extra={"available": len(identifiers), "limit": items.limit},
        )
        return items

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def identifiers(self) -> Tuple[int, ...]:
        return self._identifiers

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    def is_filled(self) -> bool:
        with self._lock:
            return self._cursor == self._limit

    def iterate(self) -> Tuple[MaterializedItem, ...]:
        """Snapshot of the items materialized so far.

        The returned tuple does not change as the list grows and can be
        iterated any number of times.
        """

        with self._lock:
            return tuple(self._materialized)

    def pending(self) -> Tuple[int, ...]:
        """Identifiers that have not been materialized yet."""

        with self._lock:
            return self._identifiers[self._cursor :]

    def __iter__(self) -> Iterator[MaterializedItem]:
        return iter(self.iterate())

    def __len__(self) -> int:
        with self._lock:
            return len(self._materialized)

    def __repr__(self) -> str:
        with self._lock:
            cursor = self._cursor
        return f"IncrementalList(cursor={cursor}, limit={self._limit}, identifiers={len(self._identifiers)})"

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------
    def insert_at(self, index: int, item: MaterializedItem) -> None:
        """Insert ``item`` at ``index`` in the materialized sequence.

        Raises:
            IndexOutOfRange: If ``index`` is past the end of the sequence.
        """

        with self._lock:
            self._insert_locked(index, item)

    def advance_one(self) -> MaterializedItem:
        """Fetch the identifier under the cursor, commit it, and advance.

        Raises:
            Exhausted: If the list is already filled.
            FetchError: If the fetch fails; the list is left unchanged.
            ConcurrentAdvance: If another writer advanced during the fetch.
        """

        index, identifier = self._claim_next()
        raw = self._source.fetch_item_details(identifier)
        item = MaterializedItem.from_raw(index, raw)
        self._commit(index, item)
        return item

    def advance_with_placeholder(self) -> MaterializedItem:
        """Commit a fallback item for the identifier under the cursor."""

        index, identifier = self._claim_next()
        item = MaterializedItem.placeholder(index, identifier)
        self._commit(index, item)
        return item

    def _claim_next(self) -> Tuple[int, int]:
        with self._lock:
            if self._cursor >= self._limit:
                raise Exhausted(f"all {self._limit} identifiers already materialized")
            return self._cursor, self._identifiers[self._cursor]

    def _commit(self, index: int, item: MaterializedItem) -> None:
        with self._lock:
            if self._cursor != index:
                raise ConcurrentAdvance(
                    f"cursor moved from {index} to {self._cursor} while item {item.identifier} was fetched"
                )
            self._insert_locked(index, item)
            self._cursor += 1

    def _insert_locked(self, index: int, item: MaterializedItem) -> None:
        if index < 0 or index > len(self._materialized):
            raise IndexOutOfRange(
                f"insert index {index} outside 0..{len(self._materialized)}"
            )
        self._materialized.insert(index, item)
