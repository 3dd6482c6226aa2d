"""Route handlers for the health and post endpoints.

Each handler either returns the value to serialize or raises a
``RequestError``; the registered exception handlers render the error body.
Either way the response is written once.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request

from spitfire_posts.exceptions import PostValidationError, StoreError
from spitfire_posts.models import Post, PostInput
from spitfire_posts.store import PostStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_store(request: Request) -> PostStore:
    """Resolve the store configured on the application."""
    store: PostStore = request.app.state.store
    return store


StoreDep = Annotated[PostStore, Depends(get_store)]


async def _call_store(operation: Callable[..., Awaitable[T]], *args: Any) -> T:
    """Invoke a store operation, reporting foreign exceptions as StoreError."""
    try:
        return await operation(*args)
    except StoreError:
        raise
    except Exception as exc:
        logger.exception(
            "Post store operation failed",
            extra={"operation": getattr(operation, "__name__", repr(operation))},
        )
        raise StoreError(str(exc)) from exc


def _require_title(body: PostInput) -> None:
    if body.title == "":
        raise PostValidationError("title cannot be empty")


async def index() -> dict[str, str]:
    """Greeting."""
    return {"message": "Hello World!"}


async def ping() -> dict[str, str]:
    """Liveness check."""
    return {"message": "Server is running!"}


async def list_posts(store: StoreDep) -> list[Post]:
    """List all posts."""
    return await _call_store(store.find_all)


async def create_post(body: PostInput, store: StoreDep) -> Post:
    """Create a post and return it with its generated id."""
    _require_title(body)
    return await _call_store(store.create, body.title, body.published, body.description)


async def update_post(post_id: str, body: PostInput, store: StoreDep) -> Post:
    """Replace the title, published flag and description of a post."""
    _require_title(body)
    return await _call_store(
        store.find_by_id_and_update,
        post_id,
        body.title,
        body.published,
        body.description,
    )


async def delete_post(post_id: str, store: StoreDep) -> Post:
    """Delete a post and return what it looked like before deletion."""
    return await _call_store(store.find_by_id_and_delete, post_id)
