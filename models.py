"""Item models for the Hacker News reader.

``RawItem`` mirrors the JSON object returned by the item endpoint, where every
field except the identifier may be missing. ``MaterializedItem`` is the
immutable, display-ready record stored by the incremental list and handed to
consumers; it applies fallback text for whatever the upstream record lacks.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type

from .errors import DecodeError


UNKNOWN_AUTHOR = "unknown"
UNTITLED = "Untitled"
DISCUSSION_URL = "https://news.ycombinator.com/item?id={identifier}"


class ItemKind(str, enum.Enum):
    STORY = "story"
    ASK = "ask"
    COMMENT = "comment"
    JOB = "job"
    POLL = "poll"

    @classmethod
    def parse(cls, value: Optional[str], title: Optional[str] = None) -> "ItemKind":
        """Map an upstream ``type`` value onto a kind, defaulting to story.

        The API reports "Ask HN" posts as plain stories, so the title prefix is
        used to tell them apart.
        """

        normalized = (value or "").strip().lower()
        try:
            kind = cls(normalized)
        except ValueError:
            kind = cls.STORY
        if kind is cls.STORY and title and title.lstrip().lower().startswith("ask hn"):
            return cls.ASK
        return kind


# Field name -> accepted JSON types. bool is rejected separately for ints.
_RAW_FIELDS: Dict[str, Tuple[Type[Any], ...]] = {
    "by": (str,),
    "title": (str,),
    "url": (str,),
    "score": (int,),
    "time": (int,),
    "descendants": (int,),
    "type": (str,),
    "text": (str,),
}


@dataclass(frozen=True)
class RawItem:
    """Decoded item body; absent fields are ``None``."""

    id: int
    by: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    score: Optional[int] = None
    time: Optional[int] = None
    descendants: Optional[int] = None
    type: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any, identifier: int) -> "RawItem":
        """Validate a decoded JSON body and build a ``RawItem``.

        Args:
            payload: The decoded response body.
            identifier: The id that was requested. The result always carries it.

        Raises:
            DecodeError: If the body is not an object, a present field has
                the wrong type, or the body names a different id.
        """

        if not isinstance(payload, dict):
            raise DecodeError(
                f"item {identifier}: expected JSON object, got {type(payload).__name__}"
            )

        values: Dict[str, Any] = {}
        for name, accepted in _RAW_FIELDS.items():
            value = payload.get(name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, accepted):
                raise DecodeError(
                    f"item {identifier}: field {name!r} has unexpected type {type(value).__name__}"
                )
            if accepted == (int,) and value < 0:
                raise DecodeError(f"item {identifier}: field {name!r} must be non-negative")
            values[name] = value

        item_id = payload.get("id")
        if item_id is not None and (isinstance(item_id, bool) or item_id != identifier):
            raise DecodeError(f"item {identifier}: body carries id {item_id!r}")

        return cls(id=identifier, **values)


@dataclass(frozen=True)
class MaterializedItem:
    """An item fetched and committed at ``position`` in the identifier list."""

    position: int
    identifier: int
    author: str
    title: str
    url: Optional[str]
    kind: ItemKind
    score: Optional[int] = None
    comments: Optional[int] = None

    @classmethod
    def from_raw(cls, position: int, raw: RawItem) -> "MaterializedItem":
        return cls(
            position=position,
            identifier=raw.id,
            author=raw.by or UNKNOWN_AUTHOR,
            title=raw.title or UNTITLED,
            url=raw.url or DISCUSSION_URL.format(identifier=raw.id),
            kind=ItemKind.parse(raw.type, raw.title),
            score=raw.score,
            comments=raw.descendants,
        )

    @classmethod
    def placeholder(cls, position: int, identifier: int) -> "MaterializedItem":
        """Stand-in committed when an identifier could not be fetched."""

        return cls.from_raw(position, RawItem(id=identifier))

    def details(self) -> str:
        parts = [f"{self.kind.value} by {self.author}"]
        if self.score is not None:
            parts.append(f"{self.score} points")
        if self.comments is not None:
            parts.append(f"{self.comments} comments")
        if self.url:
            parts.append(self.url)
        return " | ".join(parts)
