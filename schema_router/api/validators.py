"""Validator Chain: per-route body/query/params validation steps.

Invariants:
    - Steps are built in InputSource order (body, query, params), only for
      declared schemas
    - A failing step returns a 400 JSONResponse and the chain stops there
    - A passing step records the validated value on request.state.validated;
      request.body/query_params/path_params are never rewritten

Design Decisions:
    - Body validated from raw bytes via validate_json: malformed JSON is just
      another "Invalid body", no separate parser error path
    - An empty body validates as {}: all-optional schemas (PATCH-style) pass,
      schemas with required fields still fail on the missing fields
    - Query strings flattened to a dict; repeated keys become lists so list-typed
      fields validate naturally
"""

import logging
from typing import Any

from starlette.datastructures import QueryParams
from starlette.requests import Request
from starlette.responses import JSONResponse

from schema_router.core.domain_types import InputSource, RouteDefinition, ValidatedInput
from schema_router.core.errors import InputValidationError
from schema_router.core.safe_parse import ParseResult, Schema

logger = logging.getLogger(__name__)


def get_validated(request: Request) -> ValidatedInput:
    """Validated values for this request (empty ValidatedInput if none ran yet)."""
    validated = getattr(request.state, "validated", None)
    if validated is None:
        validated = ValidatedInput()
        request.state.validated = validated
    return validated


def query_to_dict(query_params: QueryParams) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key in query_params.keys():
        values = query_params.getlist(key)
        result[key] = values[0] if len(values) == 1 else values
    return result


class ValidationStep:
    """Validates one input source of a request against a compiled Schema."""

    def __init__(self, source: InputSource, schema: Schema):
        self.source = source
        self.schema = schema

    async def parse(self, request: Request) -> ParseResult:
        if self.source is InputSource.BODY:
            raw = await request.body()
            if not raw.strip():
                return self.schema.safe_parse({})
            return self.schema.safe_parse_json(raw)
        if self.source is InputSource.QUERY:
            return self.schema.safe_parse(query_to_dict(request.query_params))
        return self.schema.safe_parse(dict(request.path_params))

    async def __call__(self, request: Request) -> JSONResponse | None:
        """Run the step; a JSONResponse means the request was rejected."""
        result = await self.parse(request)
        if not result.success:
            rejection = InputValidationError(self.source, result.issues)
            logger.warning(
                f"{rejection.message} on {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "source": self.source.value,
                    "error_code": rejection.code,
                    "category": rejection.category.value,
                    "issue_count": len(result.issues),
                },
            )
            return JSONResponse(
                status_code=rejection.http_status, content=rejection.to_response(),
            )
        get_validated(request).record(self.source, result.data)
        return None

    def __repr__(self) -> str:
        return f"ValidationStep({self.source.value}, {self.schema!r})"


def build_validator_chain(definition: RouteDefinition) -> tuple[ValidationStep, ...]:
    """Build the ordered validation steps for a route's declared schemas."""
    return tuple(
        ValidationStep(source, Schema(definition.schema_for(source)))
        for source in InputSource
        if definition.schema_for(source) is not None
    )
