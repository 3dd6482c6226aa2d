"""FastAPI adapter for the posts service."""

from spitfire_posts.fastapi.errors import register_error_handlers
from spitfire_posts.fastapi.router import create_post_router

__all__ = ["create_post_router", "register_error_handlers"]
