"""Error Handlers: ordered fallback stages for errors escaping a route chain.

Invariants:
    - Every exception is classified once into a tagged RouteError before dispatch
    - Handlers run in order; the first to return a Response wins, None passes on
    - Handlers may be plain or async callables; awaitable results are awaited
    - Engine validation errors (ErrorKind.VALIDATION) → 400 "Validation error"
    - Everything else → the catch-all, which always answers
    - Rejections already answered by the validator chain never reach this module

Design Decisions:
    - Explicit tuple of typed handlers run by our own dispatcher instead of
      framework-registered exception handlers: ordering is visible and the
      generic stage cannot shadow the specific one
    - Caller-supplied handlers run before the defaults; the defaults always
      close the list so dispatch_error() always has an answer
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence

from fastapi import status
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from schema_router.core.errors import (
    ErrorKind, ErrorSeverity, RouteDefinitionError, RouteError, classify_error,
)

logger = logging.getLogger(__name__)

ErrorHandler = Callable[
    [Request, RouteError], Response | None | Awaitable[Response | None],
]


async def handle_schema_validation_error(
    request: Request, error: RouteError,
) -> Response | None:
    """Answer validation-engine errors thrown from a handler or schema."""
    if error.kind is not ErrorKind.VALIDATION:
        return None
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_code": error.code,
            "category": error.category.value,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=error.to_response(),
    )


async def handle_unclassified_error(request: Request, error: RouteError) -> Response:
    """Catch-all; status comes from the error (500 for HandlerError)."""
    critical = error.severity is ErrorSeverity.CRITICAL
    original = error.__cause__ or error
    logger.log(
        logging.ERROR if critical else logging.WARNING,
        f"Unhandled error on {request.method} {request.url.path}: {original}",
        exc_info=original if critical else None,
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_code": error.code,
            "category": error.category.value,
        },
    )
    return JSONResponse(status_code=error.http_status, content=error.to_response())


DEFAULT_ERROR_HANDLERS: tuple[ErrorHandler, ...] = (
    handle_schema_validation_error,
    handle_unclassified_error,
)


def build_error_handlers(custom: Sequence[ErrorHandler] = ()) -> tuple[ErrorHandler, ...]:
    """Caller handlers first, then the two default stages."""
    for handler in custom:
        if not callable(handler):
            raise RouteDefinitionError(f"Error handler {handler!r} is not callable")
    return (*custom, *DEFAULT_ERROR_HANDLERS)


async def dispatch_error(
    request: Request,
    exc: Exception,
    handlers: Sequence[ErrorHandler],
    include_stack: bool = False,
) -> Response:
    """Classify exc and run it through the ordered handlers."""
    error = classify_error(exc, include_stack)
    if error is not exc:
        error.__cause__ = exc
    for handler in handlers:
        response = handler(request, error)
        if inspect.isawaitable(response):
            response = await response
        if response is not None:
            return response
    return await handle_unclassified_error(request, error)
