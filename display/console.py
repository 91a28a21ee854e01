"""Line-oriented consumer that renders delivered items to a text stream.

``DisplayList`` is the display-only structure a consumer appends to; it keeps
its own copy of what has been shown so rendering never touches the shared
list's lock. ``ConsoleConsumer`` drains the delivery channel into it and
prints each new row as it arrives.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from ..delivery import DeliveryChannel
from ..models import MaterializedItem


@dataclass
class DisplayItem:
    title: str
    details: str

    @classmethod
    def from_item(cls, item: MaterializedItem) -> "DisplayItem":
        return cls(title=item.title, details=item.details())


@dataclass
class DisplayList:
    items: List[DisplayItem] = field(default_factory=list)

    def append_item(self, item: DisplayItem) -> None:
        self.items.append(item)

    def __len__(self) -> int:
        return len(self.items)


class ConsoleConsumer:
    def __init__(self, stream: Optional[TextIO] = None, show_details: bool = True) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.show_details = show_details
        self.display = DisplayList()

    def run(self, channel: DeliveryChannel) -> int:
        """Print items until the channel reports end-of-stream.

        Returns the number of rows displayed.
        """

        for item in channel:
            self._show(item)
        return len(self.display)

    def _show(self, item: MaterializedItem) -> None:
        entry = DisplayItem.from_item(item)
        self.display.append_item(entry)
        self.stream.write(f"{len(self.display):>3}. {entry.title}\n")
        if self.show_details:
            self.stream.write(f"     {entry.details}\n")
        self.stream.flush()
