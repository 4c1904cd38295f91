"""Roles endpoint: replace the role index."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from subordinates.core.config import get_settings
from subordinates.core.state import get_finder
from subordinates.schemas.hierarchy import LoadResponse, Role
from subordinates.services.finder import Finder

router = APIRouter()


@router.put("", response_model=LoadResponse)
def put_roles(
    body: list[Role],
    finder: Annotated[Finder, Depends(get_finder)],
) -> LoadResponse:
    """
    Replace the whole role index with the roles in the body (a JSON array).

    Later entries with a repeated id overwrite earlier ones. Parent references are not checked
    here; a dangling parent only surfaces when a subordinate query walks through it.
    """
    max_items = get_settings().MAX_ITEMS_PER_LOAD
    if len(body) > max_items:
        raise HTTPException(
            status_code=422,
            detail=f"At most {max_items} roles per request.",
        )
    finder.load_roles(body)
    return LoadResponse(loaded=len({role.id for role in body}))
