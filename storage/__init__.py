"""Storage package exposing the in-memory incremental item list."""

from .incremental_list import DEFAULT_LIMIT, IncrementalList

__all__ = ["DEFAULT_LIMIT", "IncrementalList"]
