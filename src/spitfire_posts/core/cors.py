"""Permissive cross-origin policy applied ahead of the pipeline."""

from dataclasses import dataclass

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spitfire_posts.settings import DEFAULT_CORS_MAX_AGE


@dataclass(frozen=True)
class CorsPolicy:
    """Which cross-origin headers to attach to every response.

    This only adds headers; it never rejects a request. Preflight requests
    are answered by the CORS middleware and never reach the pipeline.
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE")
    allow_headers: tuple[str, ...] = ("*",)
    allow_credentials: bool = True
    max_age: int = DEFAULT_CORS_MAX_AGE

    def install(self, app: FastAPI) -> None:
        """Register the policy as the outermost middleware of ``app``.

        Must be called after every other ``add_middleware`` call.
        """
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(self.allow_origins),
            allow_methods=list(self.allow_methods),
            allow_headers=list(self.allow_headers),
            allow_credentials=self.allow_credentials,
            max_age=self.max_age,
        )
