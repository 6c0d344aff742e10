"""
jl story - Story commands.
"""

from jiralite.commands.prompts import ask_field, ask_status, confirm
from jiralite.store import JiraDatabase, Status, Story


def cmd_story_show(args, db: JiraDatabase) -> int:
    """Show story details and its owning epic."""
    story = db.get_story(args.id)
    epic_id = db.find_story_epic(args.id)

    print(f"Story {args.id}: {story.name}")
    print("=" * 60)
    print(f"Epic:        {epic_id}")
    print(f"Status:      {story.status.label}")
    print(f"Description: {story.description or '(none)'}")
    return 0


def cmd_story_create(args, db: JiraDatabase) -> int:
    """Create a story in an epic, prompting for missing fields."""
    # Fail before prompting if the epic is unknown
    db.get_epic(args.epic_id)

    name = args.name if args.name is not None else ask_field("Story Name")
    description = args.description if args.description is not None else ask_field("Story Description")

    if not name:
        print("ERROR: Story name is required")
        return 1

    story_id = db.create_story(Story(name=name, description=description), args.epic_id)
    print(f"Created story {story_id} in epic {args.epic_id}: {name}")
    return 0


def cmd_story_delete(args, db: JiraDatabase) -> int:
    """Delete a story from an epic."""
    story = db.get_story(args.story_id)

    if not args.yes:
        print(f"Deleting story {args.story_id}: {story.name}")
        if not confirm("Are you sure?"):
            print("Cancelled")
            return 0

    db.delete_story(args.epic_id, args.story_id)
    print(f"Deleted story {args.story_id} from epic {args.epic_id}")
    return 0


def cmd_story_status(args, db: JiraDatabase) -> int:
    """Set the status of a story."""
    if args.status is not None:
        try:
            status = Status.parse(args.status)
        except ValueError as e:
            print(f"ERROR: {e}")
            return 1
    else:
        status = ask_status(db.get_story(args.id).status)

    db.update_story_status(args.id, status)
    print(f"Story {args.id} is now {status.label}")
    return 0
