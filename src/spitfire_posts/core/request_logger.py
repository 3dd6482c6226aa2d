"""Request logging stage: latency, path and status for every request."""

import logging
import time
from collections.abc import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestLogger:
    """Pipeline stage that observes each request/response pair.

    Wraps everything after it in the chain. It never changes the response
    and logs even when a later stage raises; the exception is re-raised.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    async def __call__(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            latency_ms = (time.perf_counter() - start) * 1000
            self.log.info(
                "Request completed: %s %s %s %.3fms",
                request.method,
                request.url.path,
                status_code,
                latency_ms,
                extra={
                    "latency_ms": round(latency_ms, 3),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                },
            )
