"""Route Table: verifies the pass-through builder and entry normalization.

Tests:
    - define_routes returns the same object
    - Mapping and pair-sequence tables normalize to ordered RouteDefinitions
    - Bad definitions (missing/non-callable handler, unknown keys) are rejected
"""

import pytest

from schema_router.core.domain_types import InputSource, RouteDefinition
from schema_router.core.errors import RouteDefinitionError
from schema_router.core.route_table import define_routes, iter_route_entries


def handler(request):
    return {}


def test_define_routes_is_identity():
    table = {"GET /a": {"handler": handler}}
    assert define_routes(table) is table


def test_mapping_entries_keep_insertion_order():
    table = {
        "GET /b": {"handler": handler},
        "GET /a": RouteDefinition(handler=handler, query=dict),
    }
    entries = iter_route_entries(table)
    assert [key for key, _ in entries] == ["GET /b", "GET /a"]
    assert all(isinstance(d, RouteDefinition) for _, d in entries)
    assert entries[1][1].query is dict


def test_pair_sequence_keeps_duplicates_for_later_detection():
    entries = iter_route_entries([
        ("GET /a", {"handler": handler}),
        ("GET /a", {"handler": handler}),
    ])
    assert len(entries) == 2


def test_mapping_definition_coerced():
    (_, definition), = iter_route_entries({"POST /a": {"body": int, "handler": handler}})
    assert definition.body is int
    assert definition.schema_for(InputSource.BODY) is int
    assert definition.has_schemas


def test_definition_without_schemas():
    (_, definition), = iter_route_entries({"GET /a": {"handler": handler}})
    assert not definition.has_schemas


def test_missing_handler_rejected():
    with pytest.raises(RouteDefinitionError, match="missing handler"):
        iter_route_entries({"GET /a": {"body": int}})


def test_non_callable_handler_rejected():
    with pytest.raises(RouteDefinitionError, match="not callable"):
        iter_route_entries({"GET /a": RouteDefinition(handler="nope")})


def test_unknown_definition_key_rejected():
    with pytest.raises(RouteDefinitionError, match="unknown definition keys"):
        iter_route_entries({"GET /a": {"handler": handler, "headers": int}})


def test_non_pair_entry_rejected():
    with pytest.raises(RouteDefinitionError, match="pairs"):
        iter_route_entries([("GET /a", {"handler": handler}, "extra")])


def test_string_table_rejected():
    with pytest.raises(RouteDefinitionError, match="mapping or a sequence"):
        iter_route_entries("GET /a")


def test_definition_of_wrong_type_rejected():
    with pytest.raises(RouteDefinitionError, match="RouteDefinition or mapping"):
        iter_route_entries({"GET /a": handler})
