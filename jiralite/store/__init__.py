"""
Persistence and integrity layer for jiralite.

Holds the epic/story data model, the storage backends (JSON file and
in-memory) and the JiraDatabase domain store that keeps the two item
kinds consistent across every mutation.
"""

from jiralite.store.backends import Database, InMemoryDatabase, JSONFileDatabase
from jiralite.store.database import JiraDatabase
from jiralite.store.errors import (
    EpicNotFoundError,
    FormatError,
    MediumError,
    NotFoundError,
    StoreError,
    StoryNotFoundError,
)
from jiralite.store.models import DBState, Epic, Status, Story, find_problems

__all__ = [
    "Database",
    "InMemoryDatabase",
    "JSONFileDatabase",
    "JiraDatabase",
    "StoreError",
    "MediumError",
    "FormatError",
    "NotFoundError",
    "EpicNotFoundError",
    "StoryNotFoundError",
    "DBState",
    "Epic",
    "Status",
    "Story",
    "find_problems",
]
