"""Ingestion package providing access to the Hacker News API."""

from .hackernews import FEEDS, HackerNewsClient, ItemSource

__all__ = ["FEEDS", "HackerNewsClient", "ItemSource"]
