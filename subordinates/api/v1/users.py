"""Users endpoints: replace the user index and query a user's subordinates."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from subordinates.core.config import get_settings
from subordinates.core.state import get_finder
from subordinates.schemas.hierarchy import LoadResponse, SubordinatesResponse, User
from subordinates.services.finder import (
    CyclicRoleGraphError,
    Finder,
    RoleNotFoundError,
    TargetUserNotFoundError,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.put("", response_model=LoadResponse)
def put_users(
    body: list[User],
    finder: Annotated[Finder, Depends(get_finder)],
) -> LoadResponse:
    """
    Replace the whole user index with the users in the body (a JSON array).

    Later entries with a repeated id overwrite earlier ones. Role references are not checked
    here; an unknown role fails the next subordinate query instead.
    """
    max_items = get_settings().MAX_ITEMS_PER_LOAD
    if len(body) > max_items:
        raise HTTPException(
            status_code=422,
            detail=f"At most {max_items} users per request.",
        )
    finder.load_users(body)
    return LoadResponse(loaded=len({user.id for user in body}))


@router.get("/{user_id}/subordinates", response_model=SubordinatesResponse)
def get_user_subordinates(
    user_id: int,
    finder: Annotated[Finder, Depends(get_finder)],
) -> SubordinatesResponse:
    """
    Return every user whose role sits strictly below this user's role in the role tree.

    - **404**: the user id is not loaded.
    - **409**: the loaded roles cannot answer the query (a referenced role is missing, or parent
      pointers form a cycle). Reload consistent roles/users and retry.
    """
    try:
        subordinates = finder.get_subordinates(user_id)
    except TargetUserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except (RoleNotFoundError, CyclicRoleGraphError) as e:
        logger.info(
            "Subordinate query rejected",
            extra={"user_id": user_id, "role_id": e.role_id, "error": type(e).__name__},
        )
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return SubordinatesResponse(
        user_id=user_id,
        count=len(subordinates),
        subordinates=subordinates,
    )
