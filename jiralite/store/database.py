"""
Epic and story operations on top of a storage backend.

Every operation is one load -> check -> mutate -> persist round trip.
Checks run before any mutation, so a failed operation never reaches
persist and the stored snapshot is left as it was.
"""

import logging
from pathlib import Path
from typing import Optional

from jiralite.store.backends import Database, JSONFileDatabase
from jiralite.store.errors import EpicNotFoundError, StoryNotFoundError
from jiralite.store.models import DBState, Epic, Status, Story

logger = logging.getLogger(__name__)


class JiraDatabase:
    """Domain store for epics and stories.

    Args:
        database: Backend providing load()/persist()
    """

    def __init__(self, database: Database):
        self.database = database

    @classmethod
    def from_path(cls, file_path) -> "JiraDatabase":
        """Domain store backed by a JSON file."""
        return cls(JSONFileDatabase(Path(file_path)))

    def read_snapshot(self) -> DBState:
        """Return the current persisted snapshot."""
        return self.database.load()

    def get_epic(self, epic_id: int) -> Epic:
        return _require_epic(self.database.load(), epic_id)

    def get_story(self, story_id: int) -> Story:
        return _require_story(self.database.load(), story_id)

    def find_story_epic(self, story_id: int) -> int:
        """Return the id of the epic owning a story."""
        state = self.database.load()
        _require_story(state, story_id)
        for epic_id, epic in state.epics.items():
            if story_id in epic.stories:
                return epic_id
        raise StoryNotFoundError(story_id, f"Story {story_id} is not linked to any epic")

    def create_epic(self, epic: Epic) -> int:
        """Insert an epic under the next free id and return that id.

        The epic is stored with the story list it is given; callers pass
        an empty one.
        """
        state = self.database.load()
        next_id = state.last_item_id + 1
        state.epics[next_id] = epic
        state.last_item_id = next_id

        self.database.persist(state)
        logger.info(f"Created epic {next_id}")
        return next_id

    def create_story(self, story: Story, epic_id: int) -> int:
        """Insert a story under the next free id, linked to an existing epic.

        Raises:
            EpicNotFoundError: epic_id does not exist; nothing is written
        """
        state = self.database.load()
        epic = _require_epic(state, epic_id, "Failed to get epic to insert new story")

        next_id = state.last_item_id + 1
        state.stories[next_id] = story
        epic.stories.append(next_id)
        state.last_item_id = next_id

        self.database.persist(state)
        logger.info(f"Created story {next_id} in epic {epic_id}")
        return next_id

    def delete_epic(self, epic_id: int) -> None:
        """Delete an epic and every story it owns. Ids are not reclaimed."""
        state = self.database.load()
        epic = _require_epic(state, epic_id)

        for story_id in epic.stories:
            state.stories.pop(story_id, None)
        del state.epics[epic_id]

        self.database.persist(state)
        logger.info(f"Deleted epic {epic_id} and {len(epic.stories)} stories")

    def delete_story(self, epic_id: int, story_id: int) -> None:
        """Delete a story and unlink it from its epic.

        Both ids are checked before anything is removed.

        Raises:
            StoryNotFoundError: story_id does not exist, or is not listed
                in that epic
            EpicNotFoundError: epic_id does not exist
        """
        state = self.database.load()
        _require_story(state, story_id, f"Failed to delete story with id {story_id}")
        epic = _require_epic(
            state,
            epic_id,
            f"Failed to delete story with id {story_id}. Epic with id {epic_id} not found",
        )
        if story_id not in epic.stories:
            raise StoryNotFoundError(
                story_id, f"Story {story_id} does not belong to epic {epic_id}"
            )

        del state.stories[story_id]
        epic.stories = [s for s in epic.stories if s != story_id]

        self.database.persist(state)
        logger.info(f"Deleted story {story_id} from epic {epic_id}")

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        state = self.database.load()
        epic = _require_epic(
            state,
            epic_id,
            f"Failed to update status of epic with id {epic_id}. No epic found",
        )
        epic.status = status

        self.database.persist(state)
        logger.info(f"Epic {epic_id} status -> {status.value}")

    def update_story_status(self, story_id: int, status: Status) -> None:
        state = self.database.load()
        story = _require_story(
            state,
            story_id,
            f"Failed to update status of story with id {story_id}. No story found",
        )
        story.status = status

        self.database.persist(state)
        logger.info(f"Story {story_id} status -> {status.value}")


def _require_epic(state: DBState, epic_id: int, message: Optional[str] = None) -> Epic:
    epic = state.epics.get(epic_id)
    if epic is None:
        logger.debug(f"Epic {epic_id} not in snapshot")
        raise EpicNotFoundError(epic_id, message)
    return epic


def _require_story(state: DBState, story_id: int, message: Optional[str] = None) -> Story:
    story = state.stories.get(story_id)
    if story is None:
        logger.debug(f"Story {story_id} not in snapshot")
        raise StoryNotFoundError(story_id, message)
    return story
