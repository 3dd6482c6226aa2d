"""Application factory.

Composes the request pipeline in its fixed order:

    CorsPolicy -> RequestLogger -> AuthGuard -> post handlers

Run with: uvicorn spitfire_posts.app:create_app --factory --port 1234
"""

import logging

from fastapi import FastAPI

from spitfire_posts.core.auth import AuthGuard
from spitfire_posts.core.cors import CorsPolicy
from spitfire_posts.core.middleware import PipelineMiddleware, guard
from spitfire_posts.core.request_logger import RequestLogger
from spitfire_posts.fastapi import create_post_router, register_error_handlers
from spitfire_posts.settings import Settings
from spitfire_posts.store import InMemoryPostStore, PostStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: PostStore | None = None,
) -> FastAPI:
    """Build the posts service.

    Args:
        settings: Service settings. Read from the environment when omitted.
        store: Post store collaborator. An empty in-memory store when omitted.

    Returns:
        A FastAPI application ready to serve.

    Raises:
        ConfigurationError: If the settings are invalid (e.g. no API keys).
    """
    settings = settings or Settings.from_env()
    if store is None:
        store = InMemoryPostStore()
        logger.warning("No post store configured, using an in-memory store")

    auth_guard = AuthGuard(settings.api_keys, header=settings.api_key_header)

    application = FastAPI(title="Spitfire Posts")
    application.state.settings = settings
    application.state.store = store

    register_error_handlers(application)
    application.include_router(create_post_router())

    application.add_middleware(
        PipelineMiddleware,
        stages=[RequestLogger(), guard(auth_guard)],
    )
    # Added last so it wraps the pipeline and answers preflights first
    CorsPolicy(max_age=settings.cors_max_age).install(application)

    logger.info(
        "Application configured",
        extra={"api_key_count": len(auth_guard.api_keys), "header": auth_guard.header},
    )
    return application
