"""Domain Types: route definitions, input sources and the validated-value side channel.

Invariants:
    - RouteDefinition is frozen: a route table is immutable once built
    - InputSource order (BODY, QUERY, PARAMS) is the validation order
    - ValidatedInput is request-scoped; one instance per request, never shared

Design Decisions:
    - str Enums: values double as the "<source>" in "Invalid <source>" envelopes
    - One uniform side channel for all three sources instead of overwriting
      request fields in place (ADR: request objects stay read-only)
"""

from dataclasses import dataclass
from enum import Enum
from collections.abc import Callable, Mapping, Sequence
from typing import Any


# ─── Enums ───────────────────────────────────────────────────────

class InputSource(str, Enum):
    """Request data a schema can be declared for, in validation order."""
    BODY = "body"
    QUERY = "query"
    PARAMS = "params"


class HttpMethod(str, Enum):
    """Method tokens accepted in a route key (matched case-insensitively)."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


# ─── Route Definitions ───────────────────────────────────────────

Handler = Callable[..., Any]


@dataclass(frozen=True)
class RouteDefinition:
    """One route: optional input schemas plus the handler that runs after them."""
    handler: Handler
    body: Any = None
    query: Any = None
    params: Any = None

    def schema_for(self, source: InputSource) -> Any:
        return getattr(self, source.value)

    @property
    def has_schemas(self) -> bool:
        return any(self.schema_for(source) is not None for source in InputSource)


DefinitionLike = RouteDefinition | Mapping[str, Any]
RouteTable = (
    Mapping[str, DefinitionLike] | Sequence[tuple[str, DefinitionLike]]
)


# ─── Side Channel ────────────────────────────────────────────────

@dataclass
class ValidatedInput:
    """Validated (and coerced) values for one request; None where no schema ran."""
    body: Any = None
    query: Any = None
    params: Any = None

    def record(self, source: InputSource, value: Any) -> None:
        setattr(self, source.value, value)
