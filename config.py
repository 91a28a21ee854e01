"""Startup configuration for the reader.

Values come from three layers, later ones winning: the dataclass defaults,
``HNREADER_*`` environment variables, and explicit overrides (normally the
command-line flags). Malformed environment values fall back to the default
rather than aborting startup.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .delivery.channel import DEFAULT_CAPACITY
from .ingest.hackernews import DEFAULT_BASE_URL, FEEDS
from .storage.incremental_list import DEFAULT_LIMIT


ENV_PREFIX = "HNREADER_"


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    v = env.get(ENV_PREFIX + key)
    if v is None or not v.strip():
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    v = env.get(ENV_PREFIX + key)
    if v is None or not v.strip():
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _get_str(env: Mapping[str, str], key: str, default: str) -> str:
    v = env.get(ENV_PREFIX + key)
    if v is None or not v.strip():
        return default
    return v.strip()


@dataclass(frozen=True)
class ReaderConfig:
    """
    base_url:
      - root of the Hacker News API, with or without a trailing slash
    feed:
      - which ranking to read: top, new, ask, show or job
    limit:
      - how many identifiers from the head of the feed to materialize
    fetch_interval:
      - seconds the updater waits between item fetches
    request_timeout:
      - per-request timeout passed to requests
    channel_capacity:
      - how many undelivered items may queue before the updater blocks
    max_attempts:
      - consecutive failures on one item before it is replaced by a
        placeholder; 0 retries forever
    backoff_seconds:
      - extra delay per failed attempt, added to fetch_interval
    """

    base_url: str = DEFAULT_BASE_URL
    feed: str = "top"
    limit: int = DEFAULT_LIMIT
    fetch_interval: float = 0.5
    request_timeout: float = 10.0
    channel_capacity: int = DEFAULT_CAPACITY
    max_attempts: int = 5
    backoff_seconds: float = 1.0

    def validate(self) -> "ReaderConfig":
        if self.feed not in FEEDS:
            raise ValueError(f"feed must be one of {', '.join(FEEDS)}, got {self.feed!r}")
        if self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")
        if self.channel_capacity < 1:
            raise ValueError(f"channel_capacity must be at least 1, got {self.channel_capacity}")
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {self.max_attempts}")
        for name in ("fetch_interval", "request_timeout", "backoff_seconds"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        return self


def load_config(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> ReaderConfig:
    """Build a validated config from the environment plus explicit overrides.

    Overrides whose value is ``None`` are ignored so argparse defaults can be
    passed straight through.
    """

    if env is None:
        env = os.environ
    defaults = ReaderConfig()
    config = ReaderConfig(
        base_url=_get_str(env, "BASE_URL", defaults.base_url),
        feed=_get_str(env, "FEED", defaults.feed).lower(),
        limit=_get_int(env, "LIMIT", defaults.limit),
        fetch_interval=_get_float(env, "FETCH_INTERVAL", defaults.fetch_interval),
        request_timeout=_get_float(env, "REQUEST_TIMEOUT", defaults.request_timeout),
        channel_capacity=_get_int(env, "CHANNEL_CAPACITY", defaults.channel_capacity),
        max_attempts=_get_int(env, "MAX_ATTEMPTS", defaults.max_attempts),
        backoff_seconds=_get_float(env, "BACKOFF_SECONDS", defaults.backoff_seconds),
    )

    known = {f.name for f in dataclasses.fields(ReaderConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"unknown config option(s): {', '.join(sorted(unknown))}")
    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        config = dataclasses.replace(config, **explicit)
    return config.validate()
