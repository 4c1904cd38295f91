"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    roles_loaded: int = Field(ge=0, description="Roles in the current role index")
    users_loaded: int = Field(ge=0, description="Users in the current user index")
