"""Tests for jiralite.lib.validate module."""

from pathlib import Path

import pytest

from jiralite.lib.validate import ValidationError, validate, validate_before_write


def empty_db() -> dict:
    return {"last_item_id": 0, "epics": {}, "stories": {}}


class TestValidate:
    """Test validate against the db schema."""

    def test_accepts_empty_db(self):
        validate(empty_db(), "db")

    def test_reports_path(self):
        data = empty_db()
        data["stories"]["1"] = {"name": "s", "description": "", "status": "Open", "extra": 1}

        with pytest.raises(ValidationError) as exc_info:
            validate(data, "db")

        assert exc_info.value.schema_name == "db"
        assert exc_info.value.path == "stories.1"

    def test_root_path(self):
        with pytest.raises(ValidationError) as exc_info:
            validate([], "db")
        assert exc_info.value.path == "(root)"

    def test_unknown_schema(self):
        with pytest.raises(ValidationError, match="Schema file not found"):
            validate({}, "no_such_schema")


class TestValidateBeforeWrite:
    """Test validate_before_write."""

    def test_refuses_invalid(self):
        data = empty_db()
        data["last_item_id"] = "3"

        with pytest.raises(ValidationError, match="Refusing to write invalid data to db.json"):
            validate_before_write(data, "db", Path("db.json"))

    def test_passes_valid(self):
        validate_before_write(empty_db(), "db", Path("db.json"))
