"""
jl list / jl init / jl check - Database-wide commands.
"""

from jiralite.store import JiraDatabase, JSONFileDatabase, find_problems


def _truncate(text: str, width: int) -> str:
    return text[:width - 3] + "..." if len(text) > width else text


def cmd_list(args, db: JiraDatabase) -> int:
    """List all epics with their status and story count."""
    state = db.read_snapshot()

    if not state.epics:
        print("Epics: none")
        print("  Create one with: jl epic create")
        return 0

    print("Epics")
    print("-" * 60)
    print(f"  {'id':<8} {'name':<32} {'status':<12} stories")
    for epic_id, epic in sorted(state.epics.items()):
        print(f"  {epic_id:<8} {_truncate(epic.name, 32):<32} {epic.status.label:<12} {len(epic.stories)}")
    return 0


def cmd_init(args, db: JiraDatabase) -> int:
    """Create an empty database file if none exists."""
    backend = db.database
    if not isinstance(backend, JSONFileDatabase):
        print("Nothing to initialize for a non-file database")
        return 0

    if backend.initialize():
        print(f"Created empty database: {backend.file_path}")
    else:
        print(f"Database already exists: {backend.file_path}")
    return 0


def cmd_check(args, db: JiraDatabase) -> int:
    """Report referential problems in the stored snapshot."""
    state = db.read_snapshot()
    problems = find_problems(state)

    if not problems:
        print(f"OK: {len(state.epics)} epics, {len(state.stories)} stories, "
              f"last id {state.last_item_id}")
        return 0

    print(f"Found {len(problems)} problem(s):")
    for problem in problems:
        print(f"  - {problem}")
    return 1
