"""Shared exceptions for service layer operations."""


class BookmarkValidationError(Exception):
    """
    Base exception for rejected bookmark input.

    The message is returned to the client verbatim, so subclasses must keep it
    free of internal detail.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingFieldError(BookmarkValidationError):
    """Raised when a required field is absent or empty on create."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"'{field}' is required")


class InvalidRatingError(BookmarkValidationError):
    """Raised when a rating is not an integer between 1 and 5."""

    def __init__(self) -> None:
        super().__init__("'rating' must be a number between 1 and 5")


class EmptyUpdateError(BookmarkValidationError):
    """Raised when a partial update supplies none of the updatable fields."""

    def __init__(self) -> None:
        super().__init__(
            "Request body must contain either 'title', 'url', 'rating', or 'description'",
        )


class InvalidBodyError(BookmarkValidationError):
    """Raised when the request body or one of its fields has the wrong shape."""


class BookmarkNotFoundError(Exception):
    """Raised at the API boundary when no bookmark matches the requested id."""

    def __init__(self, bookmark_id: int | str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark Not Found")


class StoreUnavailableError(Exception):
    """
    Raised when the bookmark store cannot complete an operation.

    Wraps driver and connectivity failures. Callers may retry the request; this
    layer never does.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Bookmark store unavailable during {operation}")
