"""Display package with the console consumer."""

from .console import ConsoleConsumer, DisplayItem, DisplayList

__all__ = ["ConsoleConsumer", "DisplayItem", "DisplayList"]
