"""Orchestration package: the background updater and the pipeline that wires it."""

from .pipeline import ReaderPipeline
from .updater import Updater, UpdaterReport

__all__ = ["ReaderPipeline", "Updater", "UpdaterReport"]
