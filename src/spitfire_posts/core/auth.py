"""Shared-secret API key guard."""

import logging
from collections.abc import Iterable

from starlette.requests import Request

from spitfire_posts.core.middleware import CONTINUE, Outcome, Terminated
from spitfire_posts.exceptions import AuthenticationError, ConfigurationError
from spitfire_posts.settings import DEFAULT_API_KEY_HEADER

logger = logging.getLogger(__name__)


class AuthGuard:
    """Reject requests whose API key header is missing or not accepted.

    The accepted keys are frozen at construction and only read afterwards,
    so one guard can serve any number of concurrent requests.

    Membership is a plain set lookup. A constant-time comparison
    (``hmac.compare_digest`` over each key) would be the place to harden
    this if keys ever become guessable.

    Example:
        guard_stage = guard(AuthGuard({"ELITE"}))
    """

    def __init__(self, api_keys: Iterable[str], header: str = DEFAULT_API_KEY_HEADER) -> None:
        keys = frozenset(key for key in api_keys if key)
        if not keys:
            raise ConfigurationError("AuthGuard requires at least one non-empty API key")
        if not header:
            raise ConfigurationError("AuthGuard requires a header name")
        self.api_keys = keys
        self.header = header

    def authenticate(self, key: str | None) -> None:
        """Check a key value against the accepted set.

        Raises:
            AuthenticationError: If the key is missing, empty, or unknown.
        """
        if not key:
            raise AuthenticationError("missing API key")
        if key not in self.api_keys:
            raise AuthenticationError("invalid API key")

    async def __call__(self, request: Request) -> Outcome:
        try:
            self.authenticate(request.headers.get(self.header))
        except AuthenticationError as exc:
            logger.warning(
                "Rejected unauthenticated request",
                extra={"path": request.url.path, "reason": exc.message},
            )
            return Terminated(exc.to_response())
        return CONTINUE
