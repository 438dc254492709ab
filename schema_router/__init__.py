"""Schema Router: declarative route tables compiled into validated FastAPI routers.

Invariants:
    - Package root re-exports the public surface only (no import side-effects)
    - Logging is never configured on import; callers opt in via setup_logging()

Design Decisions:
    - Explicit re-exports over star imports: the public API is the list below
      (ADR: explicit imports only)
"""

from schema_router.api.compiler import schema_router
from schema_router.api.error_handlers import (
    handle_schema_validation_error, handle_unclassified_error,
)
from schema_router.api.validators import get_validated
from schema_router.config import RouterSettings, get_settings
from schema_router.core.domain_types import (
    HttpMethod, InputSource, RouteDefinition, ValidatedInput,
)
from schema_router.core.errors import (
    ErrorKind, HandlerError, InputValidationError, RouteDefinitionError,
    RouteError, SchemaRouterError, SchemaValidationError,
)
from schema_router.core.route_key import parse_route_key
from schema_router.core.route_table import define_routes
from schema_router.core.safe_parse import ParseFailure, ParseSuccess, Schema
from schema_router.infrastructure.observability import setup_logging

__all__ = [
    "ErrorKind",
    "HandlerError",
    "HttpMethod",
    "InputSource",
    "InputValidationError",
    "ParseFailure",
    "ParseSuccess",
    "RouteDefinition",
    "RouteDefinitionError",
    "RouteError",
    "RouterSettings",
    "Schema",
    "SchemaRouterError",
    "SchemaValidationError",
    "ValidatedInput",
    "define_routes",
    "get_settings",
    "get_validated",
    "handle_schema_validation_error",
    "handle_unclassified_error",
    "parse_route_key",
    "schema_router",
    "setup_logging",
]
