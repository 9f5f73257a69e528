"""Outbound escaping of user-supplied bookmark text."""
import html

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse


def sanitize_text(value: str) -> str:
    """
    Escape markup-significant characters (&, <, >, quotes).

    Existing entities are decoded first, so text that was already escaped comes
    back unchanged and repeated calls never double-escape.
    """
    return html.escape(html.unescape(value))


def sanitize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the response for a stored bookmark with title and description escaped."""
    return BookmarkResponse(
        id=bookmark.id,
        title=sanitize_text(bookmark.title),
        url=bookmark.url,
        rating=int(bookmark.rating),
        description=sanitize_text(bookmark.description or ""),
    )
