"""Health check endpoint with current index sizes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from subordinates.core.config import settings
from subordinates.core.state import get_finder
from subordinates.schemas.health import HealthResponse
from subordinates.services.finder import Finder

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(finder: Annotated[Finder, Depends(get_finder)]) -> HealthResponse:
    """
    Return service health status and how many roles/users are loaded.
    Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        roles_loaded=finder.role_count,
        users_loaded=finder.user_count,
    )
