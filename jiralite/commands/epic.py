"""
jl epic - Epic commands.
"""

from jiralite.commands.prompts import ask_field, ask_status, confirm
from jiralite.store import Epic, EpicNotFoundError, JiraDatabase, Status


def cmd_epic_show(args, db: JiraDatabase) -> int:
    """Show epic details and the stories it owns."""
    state = db.read_snapshot()
    epic = state.epics.get(args.id)
    if epic is None:
        raise EpicNotFoundError(args.id)

    print(f"Epic {args.id}: {epic.name}")
    print("=" * 60)
    print(f"Status:      {epic.status.label}")
    print(f"Description: {epic.description or '(none)'}")
    print()

    if not epic.stories:
        print("Stories: none")
        return 0

    print("Stories")
    print("-" * 60)
    for story_id in epic.stories:
        story = state.stories.get(story_id)
        if story is None:
            print(f"  {story_id:<8} [missing]")
            continue
        print(f"  {story_id:<8} {story.name[:32]:<32} {story.status.label}")
    return 0


def cmd_epic_create(args, db: JiraDatabase) -> int:
    """Create an epic, prompting for fields not given on the command line."""
    name = args.name if args.name is not None else ask_field("Epic Name")
    description = args.description if args.description is not None else ask_field("Epic Description")

    if not name:
        print("ERROR: Epic name is required")
        return 1

    epic_id = db.create_epic(Epic(name=name, description=description))
    print(f"Created epic {epic_id}: {name}")
    return 0


def cmd_epic_delete(args, db: JiraDatabase) -> int:
    """Delete an epic together with all of its stories."""
    epic = db.get_epic(args.id)

    if not args.yes:
        print(f"Deleting epic {args.id}: {epic.name}")
        if not confirm("Are you sure? All stories in this epic will also be deleted"):
            print("Cancelled")
            return 0

    db.delete_epic(args.id)
    print(f"Deleted epic {args.id} ({len(epic.stories)} stories)")
    return 0


def cmd_epic_status(args, db: JiraDatabase) -> int:
    """Set the status of an epic."""
    if args.status is not None:
        try:
            status = Status.parse(args.status)
        except ValueError as e:
            print(f"ERROR: {e}")
            return 1
    else:
        status = ask_status(db.get_epic(args.id).status)

    db.update_epic_status(args.id, status)
    print(f"Epic {args.id} is now {status.label}")
    return 0
