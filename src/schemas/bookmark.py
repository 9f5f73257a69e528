"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str
    url: str
    rating: int
    description: str = ""


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Only fields explicitly set on the model are written; use
    `model_dump(exclude_unset=True)` to get them.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str | None = None
    url: str | None = None
    rating: int | None = None
    description: str | None = None


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses. Text fields are already sanitized."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    rating: int
    description: str
