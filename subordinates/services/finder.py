"""Subordinate finder: which users hold a role strictly below a target user's role.

Usage:
  finder = Finder()
  finder.load_roles(roles)   # load_roles / load_users in any order, as often as needed
  finder.load_users(users)
  finder.get_subordinates(user_id)

Both indexes are replaced wholesale on each load. A query works against the snapshot that
was current when it started, so a concurrent load never shows it a half-built index.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from subordinates.schemas.hierarchy import ROOT_PARENT_ID, Role, User

logger = logging.getLogger(__name__)


class SubordinatesError(Exception):
    """Base class for errors raised by a subordinate query. Never transient."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TargetUserNotFoundError(SubordinatesError):
    """Raised when the queried user id is not in the user index."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"Target user not found: {user_id}")


class RoleNotFoundError(SubordinatesError):
    """Raised when a role id referenced by a user or a parent pointer is not in the role index."""

    def __init__(self, role_id: int, user_id: int | None = None) -> None:
        self.role_id = role_id
        self.user_id = user_id
        if user_id is None:
            message = f"Role not found: {role_id}"
        else:
            message = f"Role not found: {role_id} (referenced by user {user_id})"
        super().__init__(message)


class CyclicRoleGraphError(SubordinatesError):
    """Raised when following parent pointers from a role comes back to a role already on the walk."""

    def __init__(self, role_id: int) -> None:
        self.role_id = role_id
        super().__init__(f"Cycle in role parents at role {role_id}")


class _Snapshot(NamedTuple):
    roles: Mapping[int, Role]
    users: Mapping[int, User]


_EMPTY: Mapping = MappingProxyType({})


class Finder:
    """Holds the role and user indexes and answers subordinate queries against them."""

    def __init__(self) -> None:
        self._snapshot = _Snapshot(roles=_EMPTY, users=_EMPTY)
        # Serializes writers only; readers take the snapshot reference once.
        self._write_lock = threading.Lock()

    @property
    def role_count(self) -> int:
        return len(self._snapshot.roles)

    @property
    def user_count(self) -> int:
        return len(self._snapshot.users)

    def load_roles(self, roles: Iterable[Role]) -> None:
        """Replace the role index. Later duplicates of an id overwrite earlier ones."""
        index = MappingProxyType({role.id: role for role in roles})
        with self._write_lock:
            self._snapshot = self._snapshot._replace(roles=index)
        logger.debug("Role index replaced: roles=%s", len(index))

    def load_users(self, users: Iterable[User]) -> None:
        """Replace the user index. Later duplicates of an id overwrite earlier ones."""
        index = MappingProxyType({user.id: user for user in users})
        with self._write_lock:
            self._snapshot = self._snapshot._replace(users=index)
        logger.debug("User index replaced: users=%s", len(index))

    def get_subordinates(self, user_id: int) -> list[User]:
        """
        Return every user whose role is a strict descendant of the target user's role.

        Users are returned in user-index order. Raises TargetUserNotFoundError if user_id is not
        loaded, RoleNotFoundError if the target's role or any other user's role (or any parent on
        the way up) cannot be resolved, and CyclicRoleGraphError if parent pointers loop. Any error
        aborts the whole query; there are no partial results.
        """
        snapshot = self._snapshot

        target = snapshot.users.get(user_id)
        if target is None:
            raise TargetUserNotFoundError(user_id)
        if target.role not in snapshot.roles:
            raise RoleNotFoundError(target.role, user_id=target.id)

        # Keyed by role id only, so valid for this target role and this call alone.
        memo: dict[int, bool] = {}
        results: list[User] = []
        for user in snapshot.users.values():
            if _is_role_subordinate(snapshot.roles, user.role, target.role, memo, user.id):
                results.append(user)
        return results


def _is_role_subordinate(
    roles: Mapping[int, Role],
    check_role_id: int,
    target_role_id: int,
    memo: dict[int, bool],
    user_id: int | None = None,
) -> bool:
    """
    True if check_role_id is a strict descendant of target_role_id.

    Walks parent pointers upward until it reaches a role whose parent is the target (True), a
    root (False) or a role already in memo. Every role on the walk is then memoized with the
    result. user_id only labels a RoleNotFoundError.
    """
    # A role is never subordinate to itself; specific to this pair, so not memoized.
    if check_role_id == target_role_id:
        return False

    path: list[int] = []
    on_path: set[int] = set()
    current = check_role_id
    while True:
        cached = memo.get(current)
        if cached is not None:
            result = cached
            break
        if current in on_path:
            raise CyclicRoleGraphError(current)
        role = roles.get(current)
        if role is None:
            raise RoleNotFoundError(current, user_id=user_id)
        path.append(current)
        on_path.add(current)
        if role.parent == target_role_id:
            result = True
            break
        if role.parent == ROOT_PARENT_ID:
            result = False
            break
        current = role.parent

    for role_id in path:
        memo[role_id] = result
    return result
