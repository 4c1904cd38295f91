"""Process-wide finder instance and its startup seeding."""

import logging

from subordinates.core.config import Settings
from subordinates.services.finder import Finder
from subordinates.services.loader import read_roles, read_users

logger = logging.getLogger(__name__)

_finder = Finder()


def get_finder() -> Finder:
    """Dependency that returns the shared Finder (override in tests)."""
    return _finder


def seed_finder(finder: Finder, settings: Settings) -> bool:
    """
    Load SEED_ROLES_PATH / SEED_USERS_PATH into finder when configured.
    Returns False when no seed files are set. Raises DataFileError on bad files.
    """
    if settings.SEED_ROLES_PATH is None or settings.SEED_USERS_PATH is None:
        return False
    roles = read_roles(settings.SEED_ROLES_PATH, max_items=settings.MAX_ITEMS_PER_LOAD)
    users = read_users(settings.SEED_USERS_PATH, max_items=settings.MAX_ITEMS_PER_LOAD)
    finder.load_roles(roles)
    finder.load_users(users)
    logger.info(
        "Finder seeded: roles=%s, users=%s",
        finder.role_count,
        finder.user_count,
    )
    return True
