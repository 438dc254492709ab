"""Route Table: the builder entry point and normalization into ordered entries.

Invariants:
    - define_routes() returns its argument unchanged (identity, no copy, no checks)
    - iter_route_entries() preserves table order exactly
    - Every normalized entry holds a RouteDefinition with a callable handler

Design Decisions:
    - Tables may be a dict (insertion-ordered) or an explicit sequence of
      (key, definition) pairs; the sequence form makes registration order
      explicit and lets duplicate keys be detected instead of overwritten
    - Mapping-style definitions ({"body": ..., "handler": ...}) are accepted so
      tables read like plain config; unknown keys are rejected to catch typos
"""

from collections.abc import Mapping
from typing import Any

from schema_router.core.domain_types import (
    DefinitionLike, RouteDefinition, RouteTable,
)
from schema_router.core.errors import RouteDefinitionError

_DEFINITION_FIELDS = frozenset({"handler", "body", "query", "params"})


def define_routes(table: RouteTable) -> RouteTable:
    """Anchor a route table's shape for callers; returns it unchanged."""
    return table


def iter_route_entries(table: RouteTable) -> list[tuple[str, RouteDefinition]]:
    """Normalize a route table into an ordered list of (key, RouteDefinition)."""
    if isinstance(table, Mapping):
        pairs = list(table.items())
    elif isinstance(table, (str, bytes)):
        raise RouteDefinitionError("Route table must be a mapping or a sequence of pairs")
    else:
        pairs = []
        for item in table:
            if not isinstance(item, tuple) or len(item) != 2:
                raise RouteDefinitionError(
                    f"Route table entries must be (key, definition) pairs, got {item!r}",
                )
            pairs.append(item)
    return [(key, coerce_definition(key, definition)) for key, definition in pairs]


def coerce_definition(route_key: str, definition: DefinitionLike) -> RouteDefinition:
    """Turn a RouteDefinition or a definition mapping into a RouteDefinition."""
    if isinstance(definition, RouteDefinition):
        return _check_handler(route_key, definition)
    if not isinstance(definition, Mapping):
        raise RouteDefinitionError(
            f"Route {route_key!r}: definition must be a RouteDefinition or mapping",
            route_key,
        )
    unknown = set(definition) - _DEFINITION_FIELDS
    if unknown:
        raise RouteDefinitionError(
            f"Route {route_key!r}: unknown definition keys {sorted(unknown)}",
            route_key,
        )
    if "handler" not in definition:
        raise RouteDefinitionError(f"Route {route_key!r}: missing handler", route_key)
    fields: dict[str, Any] = dict(definition)
    return _check_handler(route_key, RouteDefinition(**fields))


def _check_handler(route_key: str, definition: RouteDefinition) -> RouteDefinition:
    if not callable(definition.handler):
        raise RouteDefinitionError(
            f"Route {route_key!r}: handler is not callable", route_key,
        )
    return definition
