"""
Unit tests for JSON-logic filter expressions: parsing, serialization, conjunction.
"""

import json

import pytest

from cvat_query.domain import expressions
from cvat_query.domain.errors import MalformedFilterExpression
from cvat_query.domain.expressions import And, Eq, Raw


def test_equality_atom_serializes_compactly():
    assert expressions.serialize(Eq("project_id", 7)) == '{"==":[{"var":"project_id"},7]}'


def test_parse_recognizes_atoms_and_conjunctions():
    expr = expressions.parse('{"and":[{"==":[{"var":"name"},"x"]},{"==":[{"var":"id"},3]}]}')
    assert expr == And((Eq("name", "x"), Eq("id", 3)))


def test_other_operators_are_kept_verbatim():
    node = {"or": [{"==": [{"var": "status"}, "completed"]}, {"<=": [{"var": "size"}, 10]}]}
    expr = expressions.parse(json.dumps(node))
    assert isinstance(expr, Raw)
    assert expr.to_json() == node


def test_nested_raw_inside_and_survives():
    node = {"and": [{"in": ["car", {"var": "labels"}]}, {"==": [{"var": "id"}, 1]}]}
    expr = expressions.parse(json.dumps(node))
    assert json.loads(expressions.serialize(expr)) == node


@pytest.mark.parametrize("source", ["not json", "[1, 2]", "null", '"text"', "{"])
def test_malformed_sources(source):
    with pytest.raises(MalformedFilterExpression):
        expressions.parse(source)


def test_conjoin_without_existing():
    assert expressions.conjoin(None, Eq("project_id", 1)) == And((Eq("project_id", 1),))


def test_conjoin_nests_instead_of_flattening():
    first = expressions.conjoin(None, Eq("project_id", 1))
    second = expressions.conjoin(first, Eq("project_id", 1))
    assert second == And((And((Eq("project_id", 1),)), Eq("project_id", 1)))


def test_round_trip_preserves_clause_order():
    source = '{"and":[{"==":[{"var":"a"},1]},{"==":[{"var":"b"},2]},{"==":[{"var":"c"},"z"]}]}'
    parsed = expressions.parse(source)
    assert expressions.serialize(parsed) == source
    combined = expressions.conjoin(parsed, Eq("project_id", 9))
    clauses = combined.clauses
    assert clauses[0] == parsed
    assert clauses[-1] == Eq("project_id", 9)
