"""Route Key Parsing: "METHOD /path" strings into a (HttpMethod, path) pair.

Invariants:
    - Split on the FIRST space only; the remainder (embedded spaces included) is the path
    - Method token matched case-insensitively against HttpMethod
    - Malformed keys raise RouteDefinitionError, never return a partial result

Design Decisions:
    - str.partition over str.split: one split point, no re-joining of path parts
    - Path must start with "/": Starlette rejects anything else at mount time,
      so reject it here with the offending key in the message
"""

from schema_router.core.domain_types import HttpMethod
from schema_router.core.errors import RouteDefinitionError


def parse_route_key(route_key: str) -> tuple[HttpMethod, str]:
    """Parse a route key like "POST /users" into (HttpMethod.POST, "/users")."""
    if not isinstance(route_key, str):
        raise RouteDefinitionError(
            f"Route key must be a string, got {type(route_key).__name__}",
        )
    method_token, separator, path = route_key.partition(" ")
    if not separator:
        raise RouteDefinitionError(
            f"Route key {route_key!r} must be 'METHOD /path'", route_key,
        )
    if not method_token:
        raise RouteDefinitionError(
            f"Route key {route_key!r} has an empty method", route_key,
        )
    try:
        method = HttpMethod(method_token.upper())
    except ValueError:
        raise RouteDefinitionError(
            f"Route key {route_key!r} has unsupported method {method_token!r}",
            route_key,
        ) from None
    if not path.startswith("/"):
        raise RouteDefinitionError(
            f"Route key {route_key!r} has a path that does not start with '/'",
            route_key,
        )
    return method, path
