"""Pydantic schemas for the role tree and the users assigned to it."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Parent value marking a root role (no parent).
ROOT_PARENT_ID = 0


class Role(BaseModel):
    """
    A node in the single-parent role tree.

    parent == ROOT_PARENT_ID marks a root role. Any other parent must name another
    role's id; that reference is only resolved when a query walks through it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Unique, non-zero role identifier.")
    name: str = Field(default="", description="Display name; not used by queries.")
    parent: int = Field(
        default=ROOT_PARENT_ID,
        description="Parent role id, or 0 for a root role.",
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        if v == ROOT_PARENT_ID:
            raise ValueError("role id must be non-zero (0 is reserved for 'no parent')")
        return v

    @property
    def is_root(self) -> bool:
        return self.parent == ROOT_PARENT_ID


class User(BaseModel):
    """A user assigned to exactly one role."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Unique user identifier.")
    name: str = Field(default="", description="Display name; not used by queries.")
    role: int = Field(..., description="Id of the role this user holds.")


class LoadResponse(BaseModel):
    """Response after replacing the role or user index."""

    loaded: int = Field(
        ...,
        ge=0,
        description="Number of distinct ids in the new index (duplicates collapse).",
    )


class SubordinatesResponse(BaseModel):
    """Users subordinate to the requested user."""

    user_id: int = Field(..., description="Id of the target user.")
    count: int = Field(..., ge=0, description="Number of subordinates returned.")
    subordinates: list[User] = Field(
        default_factory=list,
        description="Subordinate users in user-index order.",
    )
