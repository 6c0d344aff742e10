"""
Interactive prompts for the epic and story commands.

A closed stdin (EOF) counts as an empty answer, so commands never hang
when run from scripts.
"""

from jiralite.store.models import Status


def _read(text: str) -> str:
    try:
        return input(text).strip()
    except EOFError:
        return ""


def ask_field(label: str) -> str:
    """Ask for a free-text item field such as 'Epic Name'."""
    return _read(f"{label}: ")


def confirm(question: str) -> bool:
    """Yes/no question; anything but y/yes means no."""
    return _read(f"{question} [y/N]: ").lower() in ("y", "yes")


def status_menu() -> str:
    """One-line menu, e.g. '1 - OPEN, 2 - IN PROGRESS, ...'."""
    return ", ".join(f"{n} - {Status.from_choice(n).label}" for n in range(1, len(Status) + 1))


def ask_status(current: Status) -> Status:
    """Ask for a new status by menu number. An empty answer keeps the current one."""
    print(f"New Status ({status_menu()}):")
    while True:
        answer = _read(f"Select [1-{len(Status)}, default={current.label}]: ")
        if not answer:
            return current
        status = Status.from_choice(int(answer)) if answer.isdecimal() else None
        if status is not None:
            return status
        print(f"Please enter a number between 1 and {len(Status)}")
