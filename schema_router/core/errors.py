"""Error Hierarchy: typed build-time and request-time failures with JSON envelopes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - RouteDefinitionError is raised only while compiling a table, never per request
    - RouteError variants carry an ErrorKind tag; fallback handlers dispatch on
      the tag, not on the exception class
    - to_response() produces the flat wire envelope: {"error": <classification>, ...}

Design Decisions:
    - Single hierarchy with SchemaRouterError base (ADR: uniform error shape)
    - classify_error() is the one place that inspects foreign exception types;
      everything downstream sees a tagged RouteError
    - Stack traces are attached only when the caller opted in (include_stack)
"""

import json
import traceback
from enum import Enum
from typing import Any

from pydantic import ValidationError

from schema_router.core.domain_types import InputSource


class ErrorSeverity(str, Enum):
    """Error severity for observability and log-level selection."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Tag carried by request-time errors for fallback dispatch."""
    INPUT = "input"
    VALIDATION = "validation"
    HANDLER = "handler"


class SchemaRouterError(Exception):
    """Base exception for all schema-router errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": self.message}


# ─── Build-time Errors ───────────────────────────────────────────

class RouteDefinitionError(SchemaRouterError):
    """A route table entry cannot be compiled (malformed key, duplicate, bad schema)."""
    def __init__(self, message: str, route_key: str | None = None):
        super().__init__(
            message, "ROUTE_DEFINITION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL,
        )
        self.route_key = route_key


# ─── Request-time Errors ─────────────────────────────────────────

class RouteError(SchemaRouterError):
    """Base for errors surfaced to clients while serving a request."""
    kind: ErrorKind


class InputValidationError(RouteError):
    """A declared schema rejected the body, query or params of a request."""
    kind = ErrorKind.INPUT

    def __init__(self, source: InputSource, issues: list[dict[str, Any]]):
        super().__init__(
            f"Invalid {source.value}", "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.source = source
        self.issues = issues

    def to_response(self) -> dict:
        return {"error": self.message, "details": self.issues}


class SchemaValidationError(RouteError):
    """A validation error thrown (not returned) from a handler or schema."""
    kind = ErrorKind.VALIDATION

    def __init__(self, issues: list[dict[str, Any]]):
        super().__init__(
            "Validation error", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.issues = issues

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "SchemaValidationError":
        return cls(issues_from_validation_error(exc))

    def to_response(self) -> dict:
        return {"error": self.message, "details": self.issues}


class HandlerError(RouteError):
    """Any other failure propagated out of a route's chain."""
    kind = ErrorKind.HANDLER

    def __init__(self, message: str, stack: str | None = None):
        super().__init__(
            "Internal Server Error", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )
        self.detail = message
        self.stack = stack

    @classmethod
    def from_exception(
        cls, exc: BaseException, include_stack: bool = False,
    ) -> "HandlerError":
        stack = None
        if include_stack:
            stack = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__),
            )
        return cls(str(exc), stack)

    def to_response(self) -> dict:
        response = {"error": self.message, "message": self.detail}
        if self.stack is not None:
            response["stack"] = self.stack
        return response


# ─── Helpers ─────────────────────────────────────────────────────

def issues_from_validation_error(exc: ValidationError) -> list[dict[str, Any]]:
    """Render pydantic issues JSON-safe (ctx may hold exception objects)."""
    return json.loads(exc.json(include_url=False))


def classify_error(exc: BaseException, include_stack: bool = False) -> RouteError:
    """Map any exception raised inside a route chain to a tagged RouteError."""
    if isinstance(exc, RouteError):
        return exc
    if isinstance(exc, ValidationError):
        return SchemaValidationError.from_pydantic(exc)
    return HandlerError.from_exception(exc, include_stack)
