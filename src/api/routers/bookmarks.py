"""Bookmark CRUD endpoints."""
import json
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from api.dependencies import get_bookmark_store
from schemas.bookmark import BookmarkResponse
from services.bookmark_store import BookmarkStore
from services.exceptions import BookmarkNotFoundError, InvalidBodyError
from services.sanitizer import sanitize_bookmark
from services.validation import validate_create, validate_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


async def read_json_body(request: Request) -> Any:
    """Decode the request body, treating an empty body as absent."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise InvalidBodyError("Request body must be a JSON object") from e


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> list[BookmarkResponse]:
    """List every bookmark."""
    bookmarks = await store.list_all()
    return [sanitize_bookmark(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: dict[str, Any] | None = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    The response carries a `Location` header pointing at the new bookmark, with
    any mount prefix preserved.
    """
    data = validate_create(payload)
    bookmark = await store.insert(data.model_dump())
    logger.info("Bookmark with id %s created", bookmark.id)

    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{bookmark.id}"
    return sanitize_bookmark(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await store.get_by_id(bookmark_id)
    if bookmark is None:
        logger.warning("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    return sanitize_bookmark(bookmark)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark_id: int,
    request: Request,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    """
    Partially update a bookmark.

    Existence is checked before the body is validated, so an unknown id is a 404
    even when the body is empty or malformed. The check and the write are separate
    statements; a delete landing in between makes the write a silent no-op.
    """
    if await store.get_by_id(bookmark_id) is None:
        logger.warning("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)

    data = validate_update(await read_json_body(request))
    await store.update(bookmark_id, data.model_dump(exclude_unset=True))
    logger.info("Bookmark with id %s updated", bookmark_id)
    return Response(status_code=204)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    """Delete a bookmark."""
    deleted = await store.delete(bookmark_id)
    if not deleted:
        logger.warning("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("Bookmark with id %s deleted", bookmark_id)
    return Response(status_code=204)
