#!/usr/bin/env python3
"""jiralite CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from jiralite.lib.config import load_config
from jiralite.store import JiraDatabase, StoreError
from jiralite.commands import epic as cmd_epic_module
from jiralite.commands import list as cmd_list_module
from jiralite.commands import story as cmd_story_module

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='jl', description='Local epic/story tracker')
    parser.add_argument('--db', help='Database file (overrides JIRALITE_DB_PATH and DB_PATH)')
    parser.add_argument('--config', '-c', type=Path, help='Env file to read (default: ./jiralite.env)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command')

    # jl init
    p_init = subparsers.add_parser('init', help='Create an empty database file')
    p_init.set_defaults(func=cmd_list_module.cmd_init)

    # jl list
    p_list = subparsers.add_parser('list', help='List epics')
    p_list.set_defaults(func=cmd_list_module.cmd_list)

    # jl check
    p_check = subparsers.add_parser('check', help='Check database consistency')
    p_check.set_defaults(func=cmd_list_module.cmd_check)

    # jl epic
    p_epic = subparsers.add_parser('epic', help='Epic commands')
    epic_sub = p_epic.add_subparsers(dest='epic_cmd', required=True)

    p_epic_show = epic_sub.add_parser('show', help='Show epic details')
    p_epic_show.add_argument('id', type=int, help='Epic ID')
    p_epic_show.set_defaults(func=cmd_epic_module.cmd_epic_show)

    p_epic_create = epic_sub.add_parser('create', help='Create epic')
    p_epic_create.add_argument('--name', '-n', help='Epic name (prompted if omitted)')
    p_epic_create.add_argument('--description', '-d', help='Epic description (prompted if omitted)')
    p_epic_create.set_defaults(func=cmd_epic_module.cmd_epic_create)

    p_epic_delete = epic_sub.add_parser('delete', help='Delete epic and its stories')
    p_epic_delete.add_argument('id', type=int, help='Epic ID')
    p_epic_delete.add_argument('--yes', '-y', action='store_true', help='Skip confirmation')
    p_epic_delete.set_defaults(func=cmd_epic_module.cmd_epic_delete)

    p_epic_status = epic_sub.add_parser('status', help='Set epic status')
    p_epic_status.add_argument('id', type=int, help='Epic ID')
    p_epic_status.add_argument('status', nargs='?', help='open, in-progress, resolved, closed or 1-4')
    p_epic_status.set_defaults(func=cmd_epic_module.cmd_epic_status)

    # jl story
    p_story = subparsers.add_parser('story', help='Story commands')
    story_sub = p_story.add_subparsers(dest='story_cmd', required=True)

    p_story_show = story_sub.add_parser('show', help='Show story details')
    p_story_show.add_argument('id', type=int, help='Story ID')
    p_story_show.set_defaults(func=cmd_story_module.cmd_story_show)

    p_story_create = story_sub.add_parser('create', help='Create story in an epic')
    p_story_create.add_argument('epic_id', type=int, help='Epic ID')
    p_story_create.add_argument('--name', '-n', help='Story name (prompted if omitted)')
    p_story_create.add_argument('--description', '-d', help='Story description (prompted if omitted)')
    p_story_create.set_defaults(func=cmd_story_module.cmd_story_create)

    p_story_delete = story_sub.add_parser('delete', help='Delete story')
    p_story_delete.add_argument('epic_id', type=int, help='Epic ID')
    p_story_delete.add_argument('story_id', type=int, help='Story ID')
    p_story_delete.add_argument('--yes', '-y', action='store_true', help='Skip confirmation')
    p_story_delete.set_defaults(func=cmd_story_module.cmd_story_delete)

    p_story_status = story_sub.add_parser('status', help='Set story status')
    p_story_status.add_argument('id', type=int, help='Story ID')
    p_story_status.add_argument('status', nargs='?', help='open, in-progress, resolved, closed or 1-4')
    p_story_status.set_defaults(func=cmd_story_module.cmd_story_status)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        return 2

    try:
        config = load_config(args.config, overrides={"DB_PATH": args.db})
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug(f"Using database {config.db_path}")

    db = JiraDatabase.from_path(config.db_path)
    try:
        # First use of a database path starts from an empty snapshot
        if args.func is not cmd_list_module.cmd_init:
            db.database.initialize()
        return args.func(args, db)
    except StoreError as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
