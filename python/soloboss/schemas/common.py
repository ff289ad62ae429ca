"""Shared building blocks for request schemas."""

from typing import Any, ClassVar
from urllib.parse import urlparse

from pydantic import BaseModel, model_validator


class PartialUpdateRequest(BaseModel):
    """Base for PATCH bodies where omitted and null mean different things.

    Only fields the client actually sent end up in changes(). A field sent as
    null clears the stored value, which is only allowed for nullable columns;
    subclasses list the rest in non_nullable_fields.
    """

    non_nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "PartialUpdateRequest":
        for name in sorted(self.non_nullable_fields & self.model_fields_set):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly provided fields, nulls included."""
        return self.model_dump(exclude_unset=True)


def validate_url(value: str | None) -> str | None:
    """Require an absolute http(s) URL, leaving the string untouched."""
    if value is None:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return value
