"""Exception hierarchy shared by the ingest, storage, and delivery layers."""

from __future__ import annotations

from typing import Optional


class ReaderError(Exception):
    """Base class for every error raised by the reader."""


class FetchError(ReaderError):
    """A request to the remote API did not yield a usable payload."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """Connection, DNS, timeout, or non-2xx status failure."""


class DecodeError(FetchError):
    """The response body was not JSON or did not match the expected shape."""


class IndexOutOfRange(ReaderError, IndexError):
    """An insert was attempted past the end of the materialized sequence."""


class Exhausted(ReaderError):
    """An advance was requested on a list that is already filled."""


class ConcurrentAdvance(ReaderError):
    """The cursor moved while a fetch was in flight (more than one writer)."""


class ChannelClosed(ReaderError):
    """The delivery channel was closed; no further items are accepted."""
