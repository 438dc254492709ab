"""Safe Parse: wraps any pydantic-validatable type in a never-raising parse contract.

Invariants:
    - safe_parse()/safe_parse_json() never raise pydantic.ValidationError; failures
      come back as ParseFailure with a non-empty, JSON-safe issue list
    - ParseSuccess.data is the validated and coerced value (model instance,
      converted scalar, ...), never the raw input
    - The TypeAdapter is built once per Schema (at compile time), then shared
      read-only across requests

Design Decisions:
    - TypeAdapter over BaseModel.model_validate: accepts models, annotated types,
      TypedDicts and dataclasses uniformly
    - An existing Schema or TypeAdapter is reused as-is, so callers can
      prebuild and share validators across routes
    - Discriminated result via `success` flag: callers branch without try/except
    - Unbuildable schema types surface as RouteDefinitionError so they fail at
      compile time, not on the first request
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from schema_router.core.errors import (
    RouteDefinitionError, issues_from_validation_error,
)


@dataclass(frozen=True)
class ParseSuccess:
    data: Any
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class ParseFailure:
    issues: list[dict[str, Any]]
    success: Literal[False] = field(default=False, init=False)


ParseResult = ParseSuccess | ParseFailure


class Schema:
    """A compiled schema exposing safe_parse() over a pydantic TypeAdapter."""

    def __init__(self, schema: Any):
        self.source_type = schema
        if isinstance(schema, Schema):
            self.source_type = schema.source_type
            self._adapter = schema._adapter
            return
        if isinstance(schema, TypeAdapter):
            self._adapter = schema
            return
        try:
            self._adapter = TypeAdapter(schema)
        except PydanticSchemaGenerationError as exc:
            raise RouteDefinitionError(
                f"Cannot build a validator for {schema!r}: {exc}",
            ) from exc

    def safe_parse(self, value: Any) -> ParseResult:
        """Validate a Python value (query/params dicts, already-decoded bodies)."""
        try:
            return ParseSuccess(self._adapter.validate_python(value))
        except ValidationError as exc:
            return ParseFailure(issues_from_validation_error(exc))

    def safe_parse_json(self, raw: bytes | str) -> ParseResult:
        """Decode and validate a JSON document in one pass; bad JSON is a failure."""
        try:
            return ParseSuccess(self._adapter.validate_json(raw))
        except ValidationError as exc:
            return ParseFailure(issues_from_validation_error(exc))

    def __repr__(self) -> str:
        return f"Schema({self.source_type!r})"
