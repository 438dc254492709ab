"""Route Key Parsing: verifies method/path splitting and malformed-key rejection.

Tests:
    - Split happens on the first space only
    - Method is case-insensitive and normalized to HttpMethod
    - Missing space, empty method, unknown method, bad path all raise
"""

import pytest

from schema_router.core.domain_types import HttpMethod
from schema_router.core.errors import RouteDefinitionError
from schema_router.core.route_key import parse_route_key


def test_parses_method_and_path():
    assert parse_route_key("POST /users") == (HttpMethod.POST, "/users")


def test_method_is_case_insensitive():
    assert parse_route_key("delete /users/{id}") == (HttpMethod.DELETE, "/users/{id}")
    assert parse_route_key("Patch /x") == (HttpMethod.PATCH, "/x")


def test_splits_on_first_space_only():
    method, path = parse_route_key("GET /files/my report")
    assert method is HttpMethod.GET
    assert path == "/files/my report"


@pytest.mark.parametrize("key", ["GET/users", "GET", ""])
def test_key_without_space_rejected(key):
    with pytest.raises(RouteDefinitionError, match="must be 'METHOD /path'"):
        parse_route_key(key)


def test_empty_method_rejected():
    with pytest.raises(RouteDefinitionError, match="empty method"):
        parse_route_key(" /users")


def test_unsupported_method_rejected():
    with pytest.raises(RouteDefinitionError, match="unsupported method 'FETCH'") as exc:
        parse_route_key("FETCH /users")
    assert exc.value.route_key == "FETCH /users"


@pytest.mark.parametrize("key", ["GET users", "GET ", "GET  /double-space"])
def test_path_must_start_with_slash(key):
    with pytest.raises(RouteDefinitionError, match="does not start with '/'"):
        parse_route_key(key)


def test_non_string_key_rejected():
    with pytest.raises(RouteDefinitionError, match="must be a string"):
        parse_route_key(("GET", "/users"))
