"""Tests for the jl command line."""

import json

import pytest

from jiralite.cli import main
from jiralite.store import JiraDatabase, Status


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JIRALITE_DB_PATH", raising=False)
    monkeypatch.delenv("JIRALITE_LOG_LEVEL", raising=False)
    return tmp_path / "db.json"


def run(db_path, *argv):
    return main(["--db", str(db_path), *argv])


def feed_input(monkeypatch, *answers):
    """Answer input() prompts in order, then raise EOFError."""
    remaining = list(answers)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


class TestInit:
    """Test jl init."""

    def test_creates_file(self, db_path, capsys):
        assert run(db_path, "init") == 0

        assert json.loads(db_path.read_text()) == {"last_item_id": 0, "epics": {}, "stories": {}}
        assert "Created empty database" in capsys.readouterr().out

    def test_existing_file(self, db_path, capsys):
        run(db_path, "init")
        assert run(db_path, "init") == 0
        assert "already exists" in capsys.readouterr().out


class TestEpicCommands:
    """Test jl epic ..."""

    def test_create_and_list(self, db_path, capsys):
        assert run(db_path, "epic", "create", "-n", "Checkout", "-d", "payment flow") == 0
        assert run(db_path, "list") == 0

        out = capsys.readouterr().out
        assert "Created epic 1: Checkout" in out
        assert "Checkout" in out.split("Epics")[1]
        assert "OPEN" in out

    def test_create_prompts_for_missing_fields(self, db_path, monkeypatch):
        feed_input(monkeypatch, "Search", "full text")

        assert run(db_path, "epic", "create") == 0

        epic = JiraDatabase.from_path(db_path).get_epic(1)
        assert epic.name == "Search"
        assert epic.description == "full text"

    def test_create_requires_name(self, db_path, monkeypatch, capsys):
        feed_input(monkeypatch)

        assert run(db_path, "epic", "create") == 1
        assert "Epic name is required" in capsys.readouterr().out

    def test_list_empty(self, db_path, capsys):
        assert run(db_path, "list") == 0
        assert "Epics: none" in capsys.readouterr().out

    def test_show_missing_epic(self, db_path, capsys):
        assert run(db_path, "epic", "show", "42") == 1
        assert "ERROR: No epic found with id 42" in capsys.readouterr().out

    def test_show(self, db_path, capsys):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")
        run(db_path, "story", "create", "1", "-n", "S1", "-d", "")

        assert run(db_path, "epic", "show", "1") == 0

        out = capsys.readouterr().out
        assert "Epic 1: E1" in out
        assert "S1" in out

    def test_status(self, db_path, capsys):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")

        assert run(db_path, "epic", "status", "1", "in-progress") == 0

        assert JiraDatabase.from_path(db_path).get_epic(1).status == Status.IN_PROGRESS
        assert "Epic 1 is now IN PROGRESS" in capsys.readouterr().out

    def test_status_menu(self, db_path, monkeypatch):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")
        feed_input(monkeypatch, "4")

        assert run(db_path, "epic", "status", "1") == 0

        assert JiraDatabase.from_path(db_path).get_epic(1).status == Status.CLOSED

    def test_status_rejects_unknown(self, db_path, capsys):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")

        assert run(db_path, "epic", "status", "1", "done") == 1
        assert "Unknown status 'done'" in capsys.readouterr().out

    def test_delete_cancelled(self, db_path, monkeypatch, capsys):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")
        feed_input(monkeypatch, "n")

        assert run(db_path, "epic", "delete", "1") == 0

        assert "Cancelled" in capsys.readouterr().out
        assert 1 in JiraDatabase.from_path(db_path).read_snapshot().epics

    def test_delete_confirmed(self, db_path):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")
        run(db_path, "story", "create", "1", "-n", "S1", "-d", "")

        assert run(db_path, "epic", "delete", "1", "--yes") == 0

        state = JiraDatabase.from_path(db_path).read_snapshot()
        assert state.epics == {}
        assert state.stories == {}
        assert state.last_item_id == 2


class TestStoryCommands:
    """Test jl story ..."""

    @pytest.fixture
    def with_epic(self, db_path):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")
        return db_path

    def test_create_in_missing_epic(self, with_epic, capsys):
        assert run(with_epic, "story", "create", "7", "-n", "S1") == 1
        assert "ERROR: No epic found with id 7" in capsys.readouterr().out

    def test_create_show_status_delete(self, with_epic, capsys):
        assert run(with_epic, "story", "create", "1", "-n", "S1", "-d", "first") == 0
        assert run(with_epic, "story", "show", "2") == 0
        assert run(with_epic, "story", "status", "2", "resolved") == 0

        db = JiraDatabase.from_path(with_epic)
        assert db.get_story(2).status == Status.RESOLVED

        assert run(with_epic, "story", "delete", "1", "2", "-y") == 0

        state = db.read_snapshot()
        assert state.stories == {}
        assert state.epics[1].stories == []

        out = capsys.readouterr().out
        assert "Created story 2 in epic 1: S1" in out
        assert "Epic:        1" in out
        assert "Deleted story 2 from epic 1" in out

    def test_delete_with_wrong_epic(self, with_epic, capsys):
        run(with_epic, "story", "create", "1", "-n", "S1", "-d", "")

        assert run(with_epic, "story", "delete", "9", "2", "-y") == 1

        assert "Epic with id 9 not found" in capsys.readouterr().out
        assert 2 in JiraDatabase.from_path(with_epic).read_snapshot().stories


class TestCheck:
    """Test jl check."""

    def test_consistent(self, db_path, capsys):
        run(db_path, "epic", "create", "-n", "E1", "-d", "")

        assert run(db_path, "check") == 0
        assert "OK: 1 epics, 0 stories" in capsys.readouterr().out

    def test_reports_orphans(self, db_path, capsys):
        db_path.write_text(json.dumps({
            "last_item_id": 2,
            "epics": {},
            "stories": {"2": {"name": "s", "description": "", "status": "Open"}},
        }))

        assert run(db_path, "check") == 1
        assert "story 2 is not referenced by any epic" in capsys.readouterr().out


class TestErrors:
    """Test error exit codes."""

    def test_corrupt_file(self, db_path, capsys):
        db_path.write_text("{not json")

        assert run(db_path, "list") == 1
        assert "ERROR: Invalid database file" in capsys.readouterr().out

    def test_bad_config_file(self, db_path, tmp_path, capsys):
        env_file = tmp_path / "bad.env"
        env_file.write_text("DB_PATH=$(rm -rf /)\n")

        assert main(["--config", str(env_file), "list"]) == 2
        assert "Invalid configuration" in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 2
