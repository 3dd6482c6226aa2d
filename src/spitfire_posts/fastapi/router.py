"""Router factory for the post endpoints.

Registers the health and post handlers on a FastAPI APIRouter.
"""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter

from spitfire_posts.fastapi import handlers

logger = logging.getLogger(__name__)

# (path, method, handler); every endpoint answers 200 on success
ROUTES: tuple[tuple[str, str, Callable[..., Any]], ...] = (
    ("/", "get", handlers.index),
    ("/ping", "get", handlers.ping),
    ("/posts", "get", handlers.list_posts),
    ("/posts", "post", handlers.create_post),
    ("/posts/{post_id}", "put", handlers.update_post),
    ("/posts/{post_id}", "delete", handlers.delete_post),
)


def create_post_router(*, prefix: str = "") -> APIRouter:
    """Create an APIRouter serving the health and post endpoints.

    Args:
        prefix: Optional URL prefix for all routes.

    Returns:
        A FastAPI APIRouter with all routes registered.

    Example:
        from fastapi import FastAPI
        from spitfire_posts.fastapi import create_post_router

        app = FastAPI()
        app.state.store = InMemoryPostStore()
        app.include_router(create_post_router())
    """
    router = APIRouter(prefix=prefix)

    for path, method, handler in ROUTES:
        _add_route(
            router=router,
            path=path,
            method=method,
            handler=handler,
            tags=_derive_tags(path),
        )
        logger.debug(
            "Registered route",
            extra={"method": method.upper(), "path": prefix + path},
        )

    logger.info(
        "Route registration complete",
        extra={"route_count": len(ROUTES), "prefix": prefix or "(none)"},
    )

    return router


def _add_route(
    router: APIRouter,
    path: str,
    method: str,
    handler: Callable[..., Any],
    tags: list[str],
) -> None:
    """Add an HTTP route to the router with metadata.

    Args:
        router: The APIRouter to add the route to.
        path: The URL path for the route.
        method: The HTTP method (lowercase).
        handler: The handler function.
        tags: List of OpenAPI tags.
    """
    router.add_api_route(
        path=path,
        endpoint=handler,
        methods=[method.upper()],
        tags=tags,
        description=handler.__doc__,
        status_code=200,
    )


def _derive_tags(path: str) -> list[str]:
    """Derive OpenAPI tags from a URL path.

    Examples:
        /posts/{post_id} -> ["posts"]
        /ping -> ["ping"]
        / -> ["root"]
    """
    parts = [p for p in path.split("/") if p and not p.startswith("{")]
    return [parts[0]] if parts else ["root"]
