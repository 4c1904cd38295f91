"""
Print the subordinates of a user from roles/users JSON files. Run from project root:
  python -m subordinates.scripts.find_subordinates ROLES.json USERS.json USER_ID [--json]
Example:
  python -m subordinates.scripts.find_subordinates roles.json users.json 3

Exit codes: 0 success, 1 unreadable or invalid data file, 2 query failed
(user not found, role not found, cyclic role parents).
"""
import argparse
import json
import logging
import sys

from subordinates.core.config import configure_logging, get_settings
from subordinates.services.finder import Finder, SubordinatesError
from subordinates.services.loader import DataFileError, read_roles, read_users

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DATA_FILE_ERROR = 1
EXIT_QUERY_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List users whose role is below the given user's role."
    )
    parser.add_argument("roles", help="Path to a JSON array of roles {id, name, parent}")
    parser.add_argument("users", help="Path to a JSON array of users {id, name, role}")
    parser.add_argument("user_id", type=int, help="Id of the target user")
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print a JSON array instead of tab-separated lines",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    try:
        roles = read_roles(args.roles, max_items=settings.MAX_ITEMS_PER_LOAD)
        users = read_users(args.users, max_items=settings.MAX_ITEMS_PER_LOAD)
    except DataFileError as e:
        print(f"Cannot load data: {e}", file=sys.stderr)
        return EXIT_DATA_FILE_ERROR

    finder = Finder()
    finder.load_roles(roles)
    finder.load_users(users)

    try:
        subordinates = finder.get_subordinates(args.user_id)
    except SubordinatesError as e:
        print(e.message, file=sys.stderr)
        return EXIT_QUERY_ERROR

    if args.as_json:
        print(json.dumps([u.model_dump() for u in subordinates], indent=2))
    else:
        for u in subordinates:
            print(f"{u.id}\t{u.name}\t{u.role}")
    logger.debug("Query completed: user_id=%s, subordinates=%s", args.user_id, len(subordinates))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
