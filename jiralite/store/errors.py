"""Exceptions raised by the tracker database."""

from pathlib import Path
from typing import Optional


class StoreError(Exception):
    """Base class for every failure surfaced by the database layer."""
    pass


class MediumError(StoreError):
    """The backing file could not be opened, read or written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class FormatError(StoreError):
    """The backing file does not decode into a valid snapshot."""

    def __init__(self, path: Path, message: str, field: Optional[str] = None):
        self.path = path
        self.field = field
        detail = f" at {field}" if field else ""
        super().__init__(f"Invalid database file {path}: {message}{detail}")


class NotFoundError(StoreError):
    """A command named an identifier absent from the snapshot."""
    kind = "item"

    def __init__(self, item_id: int, message: Optional[str] = None):
        self.item_id = item_id
        super().__init__(message or f"No {self.kind} found with id {item_id}")


class EpicNotFoundError(NotFoundError):
    kind = "epic"


class StoryNotFoundError(NotFoundError):
    kind = "story"
