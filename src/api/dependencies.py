"""FastAPI dependencies for injection."""
from fastapi import Request

from services.bookmark_store import BookmarkStore


def get_bookmark_store(request: Request) -> BookmarkStore:
    """Return the store the running application was created with."""
    return request.app.state.bookmark_store
