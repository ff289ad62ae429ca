"""Document (Briefcase) Pydantic schemas.

Only metadata is stored; file_url points at content uploaded elsewhere.
"""

from datetime import datetime
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from soloboss.schemas.common import PartialUpdateRequest, validate_url


class CreateDocumentRequest(BaseModel):
    """Request body for registering a document."""

    name: str = Field(..., min_length=1, description="Display name")
    description: str | None = Field(default=None, description="Optional description")
    file_url: str = Field(..., description="Absolute URL of the stored file")
    file_type: str = Field(..., min_length=1, description="MIME type or extension")
    file_size: int = Field(..., gt=0, description="File size in bytes")
    folder_path: str | None = Field(default=None, description="Folder, or null for unfiled")

    @field_validator("file_url")
    @classmethod
    def validate_file_url(cls, v: str) -> str:
        return validate_url(v)


class UpdateDocumentRequest(PartialUpdateRequest):
    """Request body for a partial document update.

    The stored file itself is immutable; only metadata can change.
    """

    non_nullable_fields: ClassVar[frozenset[str]] = frozenset({"name"})

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    folder_path: str | None = None


class DocumentOut(BaseModel):
    """Response schema for a document."""

    id: UUID
    user_id: UUID
    name: str
    description: str | None
    file_url: str
    file_type: str
    file_size: int
    folder_path: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
