"""Route Compiler: turns a route table into a mountable FastAPI APIRouter.

Invariants:
    - Routes are registered in table order, one endpoint per (method, path)
    - Every key is parsed and every schema compiled before the router is
      returned; a bad table raises RouteDefinitionError from schema_router()
    - Duplicate (method, path) pairs are rejected, never silently overwritten
    - Per request: validators (body → query → params) → handler; the first
      failing validator answers 400 and nothing after it runs
    - Errors escaping validators or handler go through the ordered error
      handlers; Starlette HTTPException is left to the host app

Design Decisions:
    - The whole chain runs inside one endpoint closure instead of stacked
      framework middleware: the order is the tuple order, nothing else
    - Endpoint takes only `request: Request` so FastAPI never parses the body
      itself; validation stays in this package
    - Sync handlers run in Starlette's threadpool, async handlers are awaited
"""

import inspect
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from schema_router.api.error_handlers import (
    ErrorHandler, build_error_handlers, dispatch_error,
)
from schema_router.api.validators import (
    ValidationStep, build_validator_chain,
)
from schema_router.config import RouterSettings, get_settings
from schema_router.core.domain_types import (
    Handler, HttpMethod, RouteTable, ValidatedInput,
)
from schema_router.core.errors import RouteDefinitionError
from schema_router.core.route_key import parse_route_key
from schema_router.core.route_table import iter_route_entries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledRoute:
    """A parsed key plus its validator chain and handler, ready to mount."""
    route_key: str
    method: HttpMethod
    path: str
    validators: tuple[ValidationStep, ...]
    handler: Handler


def compile_routes(table: RouteTable) -> list[CompiledRoute]:
    """Parse keys, build chains and reject duplicates; no router is touched."""
    compiled: list[CompiledRoute] = []
    seen: dict[tuple[HttpMethod, str], str] = {}
    for route_key, definition in iter_route_entries(table):
        method, path = parse_route_key(route_key)
        if (method, path) in seen:
            raise RouteDefinitionError(
                f"Route {route_key!r} duplicates {seen[(method, path)]!r}",
                route_key,
            )
        seen[(method, path)] = route_key
        try:
            validators = (
                build_validator_chain(definition) if definition.has_schemas else ()
            )
        except RouteDefinitionError as exc:
            raise RouteDefinitionError(f"Route {route_key!r}: {exc}", route_key) from exc
        compiled.append(CompiledRoute(
            route_key=route_key,
            method=method,
            path=path,
            validators=validators,
            handler=definition.handler,
        ))
    return compiled


def _is_async(handler: Handler) -> bool:
    return inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
        getattr(handler, "__call__", None),
    )


async def call_handler(handler: Handler, request: Request) -> Response:
    """Invoke a handler and turn a non-Response return value into JSON."""
    if _is_async(handler):
        result = await handler(request)
    else:
        result = await run_in_threadpool(handler, request)
    if isinstance(result, Response):
        return result
    return JSONResponse(content=jsonable_encoder(result))


def build_endpoint(
    route: CompiledRoute,
    error_handlers: Sequence[ErrorHandler],
    include_stack: bool = False,
):
    """Wrap a compiled route's chain into a single Starlette endpoint."""

    async def endpoint(request: Request) -> Response:
        request.state.validated = ValidatedInput()
        try:
            for step in route.validators:
                rejection = await step(request)
                if rejection is not None:
                    return rejection
            return await call_handler(route.handler, request)
        except HTTPException:
            raise
        except Exception as exc:
            return await dispatch_error(request, exc, error_handlers, include_stack)

    return endpoint


def schema_router(
    table: RouteTable,
    *,
    error_handlers: Sequence[ErrorHandler] = (),
    settings: RouterSettings | None = None,
) -> APIRouter:
    """Compile a route table into an APIRouter; mount with app.include_router()."""
    settings = settings or get_settings()
    routes = compile_routes(table)
    handlers = build_error_handlers(error_handlers)
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            build_endpoint(route, handlers, settings.include_error_stack),
            methods=[route.method.value],
            name=route.route_key,
        )
        logger.debug(
            f"Registered {route.route_key} with {len(route.validators)} validator(s)",
            extra={
                "route": route.route_key,
                "method": route.method.value,
                "path": route.path,
            },
        )
    logger.info(f"Compiled schema router with {len(routes)} route(s)")
    return router
