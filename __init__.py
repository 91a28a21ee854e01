"""Top-level package for the incremental Hacker News reader."""

from .config import ReaderConfig, load_config
from .delivery import DeliveryChannel
from .display import ConsoleConsumer
from .errors import (
    ChannelClosed,
    ConcurrentAdvance,
    DecodeError,
    Exhausted,
    FetchError,
    IndexOutOfRange,
    ReaderError,
    TransportError,
)
from .ingest import HackerNewsClient
from .models import ItemKind, MaterializedItem, RawItem
from .orchestrator import ReaderPipeline, Updater
from .storage import IncrementalList

__all__ = [
    "ReaderConfig",
    "load_config",
    "DeliveryChannel",
    "ConsoleConsumer",
    "ChannelClosed",
    "ConcurrentAdvance",
    "DecodeError",
    "Exhausted",
    "FetchError",
    "IndexOutOfRange",
    "ReaderError",
    "TransportError",
    "HackerNewsClient",
    "ItemKind",
    "MaterializedItem",
    "RawItem",
    "ReaderPipeline",
    "Updater",
    "IncrementalList",
]
