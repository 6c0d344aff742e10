"""Tests for jiralite.commands.prompts module."""

import pytest

from jiralite.commands.prompts import ask_field, ask_status, confirm, status_menu
from jiralite.store import Status


@pytest.fixture
def answers(monkeypatch):
    """Queue answers for input(); EOFError once the queue is empty."""
    queue = []

    def fake_input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return queue


class TestAskField:
    """Test ask_field."""

    def test_strips_answer(self, answers):
        answers.append("  Checkout  ")
        assert ask_field("Epic Name") == "Checkout"

    def test_eof_is_empty(self, answers):
        assert ask_field("Epic Name") == ""


class TestConfirm:
    """Test confirm."""

    @pytest.mark.parametrize("answer,expected", [
        ("y", True),
        ("YES", True),
        ("n", False),
        ("", False),
        ("sure", False),
    ])
    def test_answers(self, answers, answer, expected):
        answers.append(answer)
        assert confirm("Delete?") is expected

    def test_eof_is_no(self, answers):
        assert confirm("Delete?") is False


class TestAskStatus:
    """Test ask_status."""

    def test_menu_lists_statuses_in_order(self):
        assert status_menu() == "1 - OPEN, 2 - IN PROGRESS, 3 - RESOLVED, 4 - CLOSED"

    def test_picks_by_number(self, answers):
        answers.append("3")
        assert ask_status(Status.OPEN) == Status.RESOLVED

    def test_empty_keeps_current(self, answers):
        answers.append("")
        assert ask_status(Status.CLOSED) == Status.CLOSED

    def test_retries_until_valid(self, answers, capsys):
        answers.extend(["9", "x", "2"])

        assert ask_status(Status.OPEN) == Status.IN_PROGRESS
        assert capsys.readouterr().out.count("Please enter a number between 1 and 4") == 2

    def test_eof_keeps_current(self, answers):
        assert ask_status(Status.RESOLVED) == Status.RESOLVED
