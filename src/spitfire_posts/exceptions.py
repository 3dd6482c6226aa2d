"""Exception hierarchy for the posts service."""

from typing import Any

from starlette.responses import JSONResponse


class SpitfireError(Exception):
    """Base exception for all posts service errors.

    Catching this exception will catch every error raised by the
    spitfire-posts package, both startup and per-request failures.

    Example:
        try:
            app = create_app()
        except SpitfireError as e:
            logger.error(f"Failed to build app: {e}")
    """


class ConfigurationError(SpitfireError):
    """Raised when settings are invalid at startup.

    Examples:
        - SPITFIRE_PORT is not an integer
        - The accepted API key set is empty

    Example:
        ConfigurationError("SPITFIRE_PORT must be an integer, got 'abc'")
    """


class MiddlewareValidationError(SpitfireError):
    """Raised when pipeline stage configuration is invalid.

    This exception is raised at app construction when:
        - A middleware value is not a list or callable
        - A stage is not an async function

    Example:
        MiddlewareValidationError(
            "Pipeline stage at index 1 must be async, got sync function log_it"
        )
    """


class RequestError(SpitfireError):
    """Base class for errors that terminate a single request.

    Each subclass carries the HTTP status it is reported with and knows
    how to render its own JSON body, so a request that fails writes
    exactly one response.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def body(self) -> dict[str, Any]:
        """Return the JSON body reported to the caller."""
        return {"error": self.message}

    def to_response(self) -> JSONResponse:
        """Render this error as a JSON response."""
        return JSONResponse(self.body(), status_code=self.status_code)


class AuthenticationError(RequestError):
    """Raised when the API key header is missing or not accepted.

    The body never says which check failed.
    """

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)

    def body(self) -> dict[str, Any]:
        return {"message": "Unauthorized"}


class PostValidationError(RequestError):
    """Raised for malformed JSON bodies or an empty title.

    Example:
        PostValidationError("title cannot be empty")
    """

    status_code = 400


class StoreError(RequestError):
    """Raised for any failure reported by the post store.

    The underlying message is exposed to the caller as-is.
    """

    status_code = 500


class PostNotFoundError(StoreError):
    """Raised when an update or delete targets a post that does not exist."""

    status_code = 404

    def __init__(self, post_id: str) -> None:
        super().__init__(f"post {post_id!r} not found")
        self.post_id = post_id
