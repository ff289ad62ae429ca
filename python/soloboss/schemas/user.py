"""User profile Pydantic schemas."""

from datetime import datetime
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from soloboss.schemas.common import PartialUpdateRequest, validate_url


class UpdateUserProfileRequest(PartialUpdateRequest):
    """Request body for updating the caller's profile.

    Email is owned by the identity provider and cannot be changed here.
    """

    non_nullable_fields: ClassVar[frozenset[str]] = frozenset({"first_name", "last_name"})

    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    profile_picture_url: str | None = None

    @field_validator("profile_picture_url")
    @classmethod
    def validate_profile_picture_url(cls, v: str | None) -> str | None:
        return validate_url(v)


class UserOut(BaseModel):
    """Response schema for a user profile."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    profile_picture_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
