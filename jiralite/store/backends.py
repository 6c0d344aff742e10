"""
Storage backends for the tracker database.

A backend only knows how to load and persist a whole DBState; all
referential rules live in JiraDatabase.
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from jiralite.lib.validate import ValidationError, validate, validate_before_write
from jiralite.store.errors import FormatError, MediumError
from jiralite.store.models import DBState

logger = logging.getLogger(__name__)

SCHEMA_NAME = "db"
MAX_ITEM_ID = 2**32 - 1


class Database(Protocol):
    """Load/persist capability over a durable medium."""

    def load(self) -> DBState:
        ...

    def persist(self, state: DBState) -> None:
        ...


class JSONFileDatabase:
    """Stores the snapshot as a pretty-printed JSON document.

    Writes go to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new
    document, never a torn one.
    """

    def __init__(self, file_path):
        self.file_path = Path(file_path)

    def __repr__(self) -> str:
        return f"JSONFileDatabase({str(self.file_path)!r})"

    def exists(self) -> bool:
        return self.file_path.exists()

    def initialize(self) -> bool:
        """Write an empty snapshot if the file does not exist yet.

        Returns:
            True if a new file was created
        """
        if self.exists():
            return False
        logger.info(f"Creating empty database at {self.file_path}")
        self.persist(DBState())
        return True

    def load(self) -> DBState:
        try:
            text = self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise MediumError(self.file_path, "Database file not found") from None
        except UnicodeDecodeError as e:
            raise FormatError(self.file_path, f"not valid UTF-8 ({e})") from None
        except OSError as e:
            raise MediumError(self.file_path, f"Cannot read database file ({e})") from e

        try:
            data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
        except json.JSONDecodeError as e:
            raise FormatError(self.file_path, f"malformed JSON ({e})") from None
        except ValueError as e:
            raise FormatError(self.file_path, str(e)) from None

        try:
            validate(data, SCHEMA_NAME)
        except ValidationError as e:
            raise FormatError(self.file_path, e.message, e.path) from None

        for collection in ("epics", "stories"):
            for key in data[collection]:
                if str(int(key)) != key:
                    raise FormatError(
                        self.file_path, f"malformed identifier {key!r}", collection
                    )

        state = DBState.from_dict(data)
        for item_id in list(state.epics) + list(state.stories):
            if item_id > MAX_ITEM_ID:
                raise FormatError(self.file_path, f"identifier {item_id} out of range")

        logger.debug(
            f"Loaded {len(state.epics)} epics and {len(state.stories)} stories "
            f"from {self.file_path}"
        )
        return state

    def persist(self, state: DBState) -> None:
        data = state.to_dict()
        try:
            validate_before_write(data, SCHEMA_NAME, self.file_path)
        except ValidationError as e:
            raise FormatError(self.file_path, e.message, e.path) from None

        content = json.dumps(data, indent=2) + "\n"
        # Replace the link target, not a symlink pointing at it
        target = self.file_path.resolve()
        tmp_path = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            mode = target.stat().st_mode & 0o777 if target.exists() else _default_mode()
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                tmp_file.write(content)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.chmod(tmp_path, mode)
            tmp_path.replace(target)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise MediumError(self.file_path, f"Cannot write database file ({e})") from e

        logger.debug(f"Persisted database to {self.file_path}")


def _reject_duplicate_keys(pairs: list[tuple]) -> dict:
    result = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate key {key!r}")
        result[key] = value
    return result


def _default_mode() -> int:
    """Permissions a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class InMemoryDatabase:
    """Keeps the last persisted snapshot in process memory.

    Snapshots are deep-copied on the way in and out, so a caller mutating
    a loaded state never touches the stored one. Not thread-safe.
    """

    def __init__(self, state: Optional[DBState] = None):
        self._state = copy.deepcopy(state) if state is not None else DBState()
        self.write_count = 0

    def load(self) -> DBState:
        return copy.deepcopy(self._state)

    def persist(self, state: DBState) -> None:
        self._state = copy.deepcopy(state)
        self.write_count += 1
