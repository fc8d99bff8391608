"""Boolean filter expressions understood by the server's generic ``filter`` parameter.

The wire form is JSON-logic: ``{"==": [{"var": "project_id"}, 7]}`` for an
equality atom and ``{"and": [...]}`` for a conjunction. Nodes built from other
operators (``or``, ``in``, ``<=`` ...) are kept verbatim as ``Raw`` so a
caller-supplied expression always survives re-serialization unchanged.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .errors import MalformedFilterExpression


@dataclass(frozen=True)
class Eq:
    """Equality atom ``field == value``."""
    field: str
    value: Any

    def to_json(self) -> Dict[str, Any]:
        return {"==": [{"var": self.field}, self.value]}


@dataclass(frozen=True)
class And:
    """Conjunction of clauses; order is preserved."""
    clauses: Tuple["Expression", ...]

    def to_json(self) -> Dict[str, Any]:
        return {"and": [c.to_json() for c in self.clauses]}


@dataclass(frozen=True)
class Raw:
    """Any other JSON-logic node, carried through as-is."""
    node: Any

    def to_json(self) -> Any:
        return self.node


Expression = Union[Eq, And, Raw]


def _from_json(node: Any) -> Expression:
    if not isinstance(node, dict) or len(node) != 1:
        return Raw(node)
    (op, args), = node.items()
    if op == "and" and isinstance(args, list):
        return And(tuple(_from_json(a) for a in args))
    if (
        op == "=="
        and isinstance(args, list)
        and len(args) == 2
        and isinstance(args[0], dict)
        and set(args[0]) == {"var"}
        and isinstance(args[0]["var"], str)
    ):
        return Eq(args[0]["var"], args[1])
    return Raw(node)


def parse(source: str) -> Expression:
    """Parse a serialized expression.

    Raises:
        MalformedFilterExpression: Not JSON, or not a JSON object at the top level.
    """
    try:
        node = json.loads(source)
    except (TypeError, ValueError) as exc:
        raise MalformedFilterExpression(str(source), str(exc)) from exc
    if not isinstance(node, dict):
        raise MalformedFilterExpression(source, "top-level node must be an object")
    return _from_json(node)


def serialize(expr: Expression) -> str:
    return json.dumps(expr.to_json(), separators=(",", ":"))


def conjoin(existing: "Expression | None", clause: Expression) -> And:
    """Wrap ``existing`` (if any) and ``clause`` into a new ``and`` node.

    The existing expression becomes the first operand as a whole; it is never
    flattened or deduplicated, so repeated calls nest.
    """
    if existing is None:
        return And((clause,))
    return And((existing, clause))
