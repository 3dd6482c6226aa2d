"""Middleware primitives for the request pipeline.

Provides the Continue/Terminated stage outcome, guard adaptation, middleware
chain assembly, and the Starlette middleware that drives the chain.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from spitfire_posts.exceptions import MiddlewareValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continue:
    """Outcome of a guard that lets the request through to the next stage."""


@dataclass(frozen=True)
class Terminated:
    """Outcome of a guard that answers the request itself.

    Attributes:
        response: The response written to the caller. No later stage runs.
    """

    response: Response


Outcome = Continue | Terminated

CONTINUE = Continue()

Guard = Callable[[Request], Awaitable[Outcome]]


def normalize_middleware(
    middleware_attr: Any,
    *,
    source: str = "",
) -> tuple[Callable[..., Any], ...]:
    """Normalize a middleware attribute to a tuple of callables.

    Accepts: None, single callable, list, or tuple.
    Returns: tuple of callables (empty if None).

    Args:
        middleware_attr: The middleware value to normalize.
        source: Context for error messages (e.g., "PipelineMiddleware").

    Raises:
        MiddlewareValidationError: If middleware_attr is not a valid type.
    """
    if middleware_attr is None:
        return ()
    if callable(middleware_attr) and not isinstance(middleware_attr, (list, tuple)):
        return (middleware_attr,)
    if isinstance(middleware_attr, (list, tuple)):
        return tuple(middleware_attr)
    raise MiddlewareValidationError(
        f"{source + ': ' if source else ''}middleware must be a list or callable, "
        f"got {type(middleware_attr).__name__}"
    )


def build_middleware_chain(
    handler: Callable[..., Any],
    middleware_stack: Sequence[Callable[..., Any]],
) -> Callable[..., Any]:
    """Wrap a handler function with a middleware chain.

    Composes middleware in order so that the first middleware in the list
    is the outermost (executes first). Each middleware receives (request, call_next)
    where call_next invokes the next middleware or handler.

    Args:
        handler: The endpoint at the end of the chain.
        middleware_stack: Ordered sequence of middleware (outermost first).

    Returns:
        A wrapped handler function that executes the middleware chain.
        If middleware_stack is empty, returns the handler unchanged.
    """
    if not middleware_stack:
        return handler

    # Build chain from inside out (last middleware wraps handler first)
    chain = handler
    for mw in reversed(middleware_stack):
        chain = _wrap_with_middleware(chain, mw)
    return chain


def guard(check: Guard) -> Callable[..., Any]:
    """Adapt an outcome-returning guard into a pipeline stage.

    The guard inspects the request and returns ``CONTINUE`` or
    ``Terminated(response)``. On ``Terminated`` the stage returns that
    response and never calls the rest of the chain.

    Args:
        check: Async callable taking the request and returning an Outcome.

    Returns:
        An async middleware function compatible with the pipeline.
    """

    async def middleware(request: Any, call_next: Any) -> Any:
        outcome = await check(request)
        if isinstance(outcome, Terminated):
            return outcome.response
        return await call_next(request)

    middleware.__name__ = f"guard({_callable_name(check)})"
    middleware.__qualname__ = middleware.__name__
    return middleware


def _callable_name(obj: Any) -> str:
    return getattr(obj, "__name__", type(obj).__name__)


def _is_async_callable(obj: Any) -> bool:
    if inspect.iscoroutinefunction(obj):
        return True
    return callable(obj) and inspect.iscoroutinefunction(getattr(obj, "__call__", None))


def _wrap_with_middleware(
    next_handler: Callable[..., Any],
    middleware: Callable[..., Any],
) -> Callable[..., Any]:
    """Wrap a handler with a single middleware function.

    Args:
        next_handler: The next function in the chain (middleware or handler).
        middleware: The middleware function with signature (request, call_next).

    Returns:
        A new async function that calls middleware(request, call_next).
    """

    async def wrapped(request: Any) -> Any:
        async def call_next(req: Any) -> Any:
            return await next_handler(req)

        return await middleware(request, call_next)

    # Preserve metadata for debugging
    wrapped.__name__ = f"{_callable_name(middleware)}_wrapping_{_callable_name(next_handler)}"
    wrapped.__qualname__ = wrapped.__name__

    return wrapped


class PipelineMiddleware(BaseHTTPMiddleware):
    """Run every request through an ordered chain of stages.

    The endpoint at the end of the chain is Starlette's ``call_next``, i.e.
    routing plus the matched handler. Stages are validated once here so a
    misconfigured pipeline fails at startup, not on the first request.
    """

    def __init__(self, app: ASGIApp, stages: Any = None) -> None:
        super().__init__(app)
        normalized = normalize_middleware(stages, source="PipelineMiddleware")
        for i, stage in enumerate(normalized):
            if not callable(stage):
                raise MiddlewareValidationError(f"Non-callable pipeline stage at index {i}")
            if not _is_async_callable(stage):
                raise MiddlewareValidationError(
                    f"Pipeline stage at index {i} must be async, "
                    f"got sync function {_callable_name(stage)}"
                )
        self.stages = normalized

        logger.debug(
            "Built request pipeline",
            extra={"stages": [_callable_name(s) for s in self.stages]},
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        chain = build_middleware_chain(call_next, self.stages)
        response: Response = await chain(request)
        return response
