"""Tests for create and partial-update validation."""
from typing import Any

import pytest

from services.exceptions import (
    EmptyUpdateError,
    InvalidBodyError,
    InvalidRatingError,
    MissingFieldError,
)
from services.validation import coerce_rating, validate_create, validate_update


class TestCoerceRating:
    """Tests for coerce_rating."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3, 3),
            (0, 0),
            (4.0, 4),
            ("5", 5),
            (" 2 ", 2),
            ("1.0", 1),
        ],
    )
    def test__coerce_rating__whole_numbers(self, value: Any, expected: int) -> None:
        """Whole numbers in any supported form become ints."""
        assert coerce_rating(value) == expected

    @pytest.mark.parametrize(
        "value",
        [True, False, "abc", "", "2.5", 2.5, "nan", "inf", None, [1], {"r": 1}],
    )
    def test__coerce_rating__rejects_non_whole_numbers(self, value: Any) -> None:
        """Anything that is not a whole number is rejected."""
        assert coerce_rating(value) is None


class TestValidateCreate:
    """Tests for validate_create."""

    def test__validate_create__full_payload(self) -> None:
        """All fields are carried into the schema."""
        data = validate_create(
            {"title": "T", "url": "https://e.com", "rating": "3", "description": "D"},
        )
        assert data.model_dump() == {
            "title": "T",
            "url": "https://e.com",
            "rating": 3,
            "description": "D",
        }

    def test__validate_create__description_defaults_to_empty(self) -> None:
        """A missing or null description becomes an empty string."""
        assert validate_create({"title": "T", "url": "u", "rating": 1}).description == ""
        assert (
            validate_create({"title": "T", "url": "u", "rating": 1, "description": None})
            .description
            == ""
        )

    def test__validate_create__numeric_title_becomes_text(self) -> None:
        """Scalar numbers in text fields are stored as their text form."""
        assert validate_create({"title": 42, "url": "u", "rating": 1}).title == "42"

    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({}, "title"),
            ({"title": "", "url": "u", "rating": 1}, "title"),
            ({"title": "T", "rating": 1}, "url"),
            ({"title": "T", "url": "", "rating": 1}, "url"),
            ({"title": "T", "url": "u"}, "rating"),
            ({"title": "T", "url": "u", "rating": 0}, "rating"),
            ({"url": "u"}, "title"),
        ],
    )
    def test__validate_create__first_missing_field(
        self, payload: dict[str, Any], field: str,
    ) -> None:
        """The first absent or falsy required field is named."""
        with pytest.raises(MissingFieldError) as exc_info:
            validate_create(payload)
        assert exc_info.value.field == field
        assert str(exc_info.value) == f"'{field}' is required"

    @pytest.mark.parametrize("rating", [6, -3, "7", "five", 1.5, True])
    def test__validate_create__invalid_rating(self, rating: Any) -> None:
        """Ratings outside 1-5 or not whole numbers are rejected."""
        with pytest.raises(InvalidRatingError):
            validate_create({"title": "T", "url": "u", "rating": rating})

    def test__validate_create__missing_body(self) -> None:
        """No body at all reports the first required field."""
        with pytest.raises(MissingFieldError) as exc_info:
            validate_create(None)
        assert exc_info.value.field == "title"

    def test__validate_create__non_object_body(self) -> None:
        """A body that is not an object is rejected."""
        with pytest.raises(InvalidBodyError):
            validate_create(["title"])

    def test__validate_create__structured_url(self) -> None:
        """A structured url is rejected as not text."""
        with pytest.raises(InvalidBodyError, match="'url' must be text"):
            validate_create({"title": "T", "url": ["u"], "rating": 1})


class TestValidateUpdate:
    """Tests for validate_update."""

    def test__validate_update__only_supplied_fields_are_set(self) -> None:
        """Fields that were not supplied are left out of the dump."""
        data = validate_update({"title": "New"})
        assert data.model_dump(exclude_unset=True) == {"title": "New"}

    def test__validate_update__ignores_unknown_and_null_fields(self) -> None:
        """Unknown keys and nulls do not reach the update."""
        data = validate_update({"id": 5, "url": "u", "description": None})
        assert data.model_dump(exclude_unset=True) == {"url": "u"}

    def test__validate_update__keeps_falsy_fields_alongside_truthy_one(self) -> None:
        """A falsy field is written when another field is truthy."""
        data = validate_update({"title": "T", "description": ""})
        assert data.model_dump(exclude_unset=True) == {"title": "T", "description": ""}

    @pytest.mark.parametrize(
        "payload",
        [None, {}, {"title": ""}, {"rating": 0}, {"title": None}, {"other": "x"}],
    )
    def test__validate_update__empty(self, payload: Any) -> None:
        """Without a truthy updatable field the update is rejected."""
        with pytest.raises(EmptyUpdateError) as exc_info:
            validate_update(payload)
        assert str(exc_info.value) == (
            "Request body must contain either 'title', 'url', 'rating', or 'description'"
        )

    def test__validate_update__rating_range_not_checked(self) -> None:
        """Out-of-range ratings pass on update."""
        assert validate_update({"rating": "9"}).rating == 9

    def test__validate_update__non_numeric_rating(self) -> None:
        """A rating that cannot be stored as an integer is rejected."""
        with pytest.raises(InvalidRatingError):
            validate_update({"rating": "excellent"})

    def test__validate_update__logs_loose_values(self, caplog: pytest.LogCaptureFixture) -> None:
        """Values the create rules would reject are logged."""
        with caplog.at_level("WARNING", logger="services.validation"):
            validate_update({"title": "", "url": "u", "rating": 0})
        assert "empty title" in caplog.text
        assert "rating outside 1-5" in caplog.text
