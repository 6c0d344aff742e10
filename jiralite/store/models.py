"""
Data models for the tracker database.

Epics and stories draw identifiers from one shared counter on DBState,
so an id is unique across both collections.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Status(Enum):
    """Lifecycle state of an epic or story. Any status may follow any other."""
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @property
    def label(self) -> str:
        """Display text, e.g. 'IN PROGRESS'."""
        return _LABELS[self]

    @classmethod
    def from_choice(cls, choice: int) -> Optional["Status"]:
        """Map a status menu number (1-4) to a status, None if out of range."""
        if 1 <= choice <= len(_MENU_ORDER):
            return _MENU_ORDER[choice - 1]
        return None

    @classmethod
    def parse(cls, text: str) -> "Status":
        """Parse a symbolic name, display label or menu number.

        Raises:
            ValueError: text names no status
        """
        value = text.strip()
        if value.isdecimal():
            status = cls.from_choice(int(value))
            if status is not None:
                return status
        wanted = value.upper().replace("-", "").replace("_", "").replace(" ", "")
        for status in cls:
            if wanted in (status.value.upper(), status.name.replace("_", "")):
                return status
        raise ValueError(f"Unknown status '{text}'")


_LABELS = {
    Status.OPEN: "OPEN",
    Status.IN_PROGRESS: "IN PROGRESS",
    Status.RESOLVED: "RESOLVED",
    Status.CLOSED: "CLOSED",
}

_MENU_ORDER = (Status.OPEN, Status.IN_PROGRESS, Status.RESOLVED, Status.CLOSED)


@dataclass
class Story:
    """A unit of work. Always owned by exactly one epic."""
    name: str
    description: str
    status: Status = Status.OPEN

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(
            name=data["name"],
            description=data["description"],
            status=Status(data["status"]),
        )


@dataclass
class Epic:
    """A parent work item. Deleting it deletes every story it lists."""
    name: str
    description: str
    status: Status = Status.OPEN
    stories: list[int] = field(default_factory=list)  # Story ids, creation order

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "stories": list(self.stories),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Epic":
        return cls(
            name=data["name"],
            description=data["description"],
            status=Status(data["status"]),
            stories=[int(story_id) for story_id in data["stories"]],
        )


@dataclass
class DBState:
    """Full snapshot of the database: id counter plus both collections."""
    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Persisted document shape. Collection keys are decimal strings."""
        return {
            "last_item_id": self.last_item_id,
            "epics": {str(k): v.to_dict() for k, v in sorted(self.epics.items())},
            "stories": {str(k): v.to_dict() for k, v in sorted(self.stories.items())},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DBState":
        """Build a snapshot from a document already validated against the db schema."""
        return cls(
            last_item_id=int(data["last_item_id"]),
            epics={int(k): Epic.from_dict(v) for k, v in data["epics"].items()},
            stories={int(k): Story.from_dict(v) for k, v in data["stories"].items()},
        )


def find_problems(state: DBState) -> list[str]:
    """Check the referential invariants of a snapshot.

    Returns:
        One human-readable line per violation; empty when consistent.
    """
    problems = []

    all_ids = list(state.epics) + list(state.stories)
    if all_ids and max(all_ids) > state.last_item_id:
        problems.append(
            f"last_item_id {state.last_item_id} is below highest id {max(all_ids)}"
        )

    for item_id in sorted(set(state.epics) & set(state.stories)):
        problems.append(f"id {item_id} is used by both an epic and a story")

    owners: dict[int, list[int]] = {}
    for epic_id, epic in sorted(state.epics.items()):
        for story_id in epic.stories:
            owners.setdefault(story_id, []).append(epic_id)
            if story_id not in state.stories:
                problems.append(f"epic {epic_id} references missing story {story_id}")

    for story_id, epic_ids in sorted(owners.items()):
        if len(epic_ids) > 1:
            listed = ", ".join(str(e) for e in epic_ids)
            problems.append(f"story {story_id} is listed more than once (epics {listed})")

    for story_id in sorted(state.stories):
        if story_id not in owners:
            problems.append(f"story {story_id} is not referenced by any epic")

    return problems
