"""Find the users whose role sits below a given user's role in a single-parent role tree."""

from subordinates.schemas.hierarchy import ROOT_PARENT_ID, Role, User
from subordinates.services.finder import (
    CyclicRoleGraphError,
    Finder,
    RoleNotFoundError,
    SubordinatesError,
    TargetUserNotFoundError,
)

__all__ = [
    "CyclicRoleGraphError",
    "Finder",
    "ROOT_PARENT_ID",
    "Role",
    "RoleNotFoundError",
    "SubordinatesError",
    "TargetUserNotFoundError",
    "User",
]
