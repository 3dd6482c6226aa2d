"""Single-resource post service behind an API-key request pipeline."""

# Primary API — the main entry point
from spitfire_posts.app import create_app

# Pipeline primitives
from spitfire_posts.core.auth import AuthGuard
from spitfire_posts.core.cors import CorsPolicy
from spitfire_posts.core.middleware import (
    CONTINUE,
    Continue,
    Outcome,
    PipelineMiddleware,
    Terminated,
    build_middleware_chain,
    guard,
)
from spitfire_posts.core.request_logger import RequestLogger

# Exceptions — for error handling
from spitfire_posts.exceptions import (
    AuthenticationError,
    ConfigurationError,
    MiddlewareValidationError,
    PostNotFoundError,
    PostValidationError,
    RequestError,
    SpitfireError,
    StoreError,
)
from spitfire_posts.models import Post, PostInput
from spitfire_posts.settings import Settings
from spitfire_posts.store import InMemoryPostStore, PostStore

__all__ = [
    # Primary API
    "create_app",
    "Settings",
    # Domain
    "Post",
    "PostInput",
    "PostStore",
    "InMemoryPostStore",
    # Pipeline
    "AuthGuard",
    "CorsPolicy",
    "RequestLogger",
    "PipelineMiddleware",
    "build_middleware_chain",
    "guard",
    "CONTINUE",
    "Continue",
    "Outcome",
    "Terminated",
    # Exceptions
    "AuthenticationError",
    "ConfigurationError",
    "MiddlewareValidationError",
    "PostNotFoundError",
    "PostValidationError",
    "RequestError",
    "SpitfireError",
    "StoreError",
]

__version__ = "1.0.0"
