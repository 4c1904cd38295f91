"""Pydantic request/response schemas."""

from subordinates.schemas.health import HealthResponse
from subordinates.schemas.hierarchy import (
    ROOT_PARENT_ID,
    LoadResponse,
    Role,
    SubordinatesResponse,
    User,
)

__all__ = [
    "HealthResponse",
    "LoadResponse",
    "ROOT_PARENT_ID",
    "Role",
    "SubordinatesResponse",
    "User",
]
