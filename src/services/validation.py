"""
Validation of incoming bookmark payloads.

Create requests are checked strictly: `title`, `url` and `rating` must be
present and truthy (checked in that order, stopping at the first failure) and
the rating must be a whole number between 1 and 5.

Partial updates are checked loosely: at least one updatable field must carry a
truthy value, and nothing is range- or emptiness-checked beyond that. Values
that would have failed the create rules are logged so they can be spotted.
"""
import logging
import math
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import (
    EmptyUpdateError,
    InvalidBodyError,
    InvalidRatingError,
    MissingFieldError,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "url", "rating")
UPDATABLE_FIELDS = ("title", "url", "rating", "description")
MIN_RATING = 1
MAX_RATING = 5

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def coerce_rating(value: Any) -> int | None:
    """
    Convert a rating to an int, or return None if it is not a whole number.

    Accepts ints, integral floats and numeric strings (e.g. "3", " 4 ", "2.0").
    Booleans, non-numeric strings, NaN/infinity and any other type are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _as_object(payload: Any) -> dict[str, Any]:
    """Treat a missing body as empty and reject anything that is not a JSON object."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidBodyError("Request body must be a JSON object")
    return payload


def _build(schema: type[SchemaT], fields: dict[str, Any]) -> SchemaT:
    try:
        return schema.model_validate(fields)
    except ValidationError as e:
        field = e.errors()[0]["loc"][0]
        raise InvalidBodyError(f"'{field}' must be text") from e


def validate_create(payload: Any) -> BookmarkCreate:
    """
    Validate a create request body.

    Raises:
        MissingFieldError: `title`, `url` or `rating` is absent or falsy.
        InvalidRatingError: `rating` is not a whole number in [1, 5].
        InvalidBodyError: the body is not an object or a text field is not text.
    """
    data = _as_object(payload)

    for field in REQUIRED_FIELDS:
        if not data.get(field):
            raise MissingFieldError(field)

    rating = coerce_rating(data["rating"])
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError

    fields: dict[str, Any] = {"title": data["title"], "url": data["url"], "rating": rating}
    if data.get("description") is not None:
        fields["description"] = data["description"]
    return _build(BookmarkCreate, fields)


def validate_update(payload: Any) -> BookmarkUpdate:
    """
    Validate a partial update request body.

    Only `title`, `url`, `rating` and `description` are considered; other keys
    and keys set to null are ignored. At least one of them must be truthy, so an
    update that only clears a field to "" is rejected.

    A supplied rating must still be a whole number because the column stores
    integers, but its range is not checked.

    Raises:
        EmptyUpdateError: no updatable field carries a truthy value.
        InvalidRatingError: `rating` is supplied but is not a whole number.
        InvalidBodyError: the body is not an object or a text field is not text.
    """
    data = _as_object(payload)
    supplied = {field: data[field] for field in UPDATABLE_FIELDS if data.get(field) is not None}

    if not any(supplied.values()):
        raise EmptyUpdateError

    if "rating" in supplied:
        rating = coerce_rating(supplied["rating"])
        if rating is None:
            raise InvalidRatingError
        if not MIN_RATING <= rating <= MAX_RATING:
            logger.warning("Partial update sets rating outside 1-5: %s", rating)
        supplied["rating"] = rating

    for field in ("title", "url"):
        if field in supplied and not supplied[field]:
            logger.warning("Partial update sets empty %s", field)

    return _build(BookmarkUpdate, supplied)
