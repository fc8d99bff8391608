from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..domain import expressions
from ..domain.expressions import Eq
from .dto import ById, Query, Search, SelfLookup
from .schemas import FilterSchema
from .validation import check_exclusive, validate


def compose_filter_expression(source: Optional[str], field: str, value: Any) -> str:
    """AND a ``field == value`` clause onto a caller-supplied expression.

    Args:
        source: Serialized expression from the caller, or None/empty.
        field: Server-side variable name (e.g. ``project_id``).
        value: Value the variable must equal.

    Returns:
        The serialized ``{"and": [...]}`` expression; the caller's expression
        (if any) comes first, the synthesized clause last.

    Raises:
        MalformedFilterExpression: ``source`` is not a valid expression.
    """
    existing = expressions.parse(source) if source else None
    return expressions.serialize(expressions.conjoin(existing, Eq(field, value)))


def compose(filter: Mapping[str, Any], schema: FilterSchema) -> Dict[str, Any]:
    """Translate a validated filter into server query params.

    Forwarded keys are copied, renamed keys are substituted, expression keys
    are folded into ``filter``; everything else is dropped. ``filter`` itself
    is left untouched.
    """
    params: Dict[str, Any] = {}
    for key, value in filter.items():
        if schema.drop_falsy and not value:
            continue
        if key in schema.rename:
            params[schema.rename[key]] = value
        elif key in schema.forward:
            params[key] = value

    for key, var in schema.expression_fields.items():
        if key in filter:
            params["filter"] = compose_filter_expression(params.get("filter"), var, filter[key])
    return params


def build_query(filter: Mapping[str, Any], schema: FilterSchema) -> Query:
    """Validate ``filter`` and decide which query shape it describes.

    This is the only place where the identity-lookup vs search decision is
    made; downstream code branches on the returned type.

    Raises:
        QueryValidationError: Unknown key, bad type, exclusive groups mixed,
            or a malformed ``filter`` expression.
    """
    validate(filter, schema.fields)
    if schema.exclusive is not None:
        check_exclusive(filter, *schema.exclusive)

    if schema.kind == "users" and filter.get("self"):
        return SelfLookup()

    params = compose(filter, schema)
    key = schema.identity_key
    if key is not None and key in filter:
        if schema.identity_only:
            params = {schema.rename.get(key, key): filter[key]}
        return ById(id=filter[key], params=params)
    return Search(params=params, paginated=any(k in filter for k in schema.pagination))
