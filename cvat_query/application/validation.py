from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from ..domain.errors import ExclusiveFieldsViolation, InvalidFilterFieldType, UnknownFilterField

TypeCheck = Callable[[Any], bool]


def is_integer(value: Any) -> bool:
    # bool is an int subclass but never a valid id/page
    return isinstance(value, int) and not isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def validate(filter: Mapping[str, Any], schema: Mapping[str, TypeCheck]) -> None:
    """Check that every key of ``filter`` is known and well-typed.

    Args:
        filter: Caller-supplied filter mapping.
        schema: Recognized key -> type predicate.

    Raises:
        InvalidFilterFieldType: ``filter`` is not a mapping, or a value fails its predicate.
        UnknownFilterField: A key is not present in ``schema``.
    """
    if not isinstance(filter, Mapping):
        raise InvalidFilterFieldType("filter", "mapping", filter)
    for key, value in filter.items():
        check = schema.get(key)
        if check is None:
            raise UnknownFilterField(key)
        if not check(value):
            raise InvalidFilterFieldType(key, check.__name__, value)


def check_exclusive(filter: Mapping[str, Any], group_a: Iterable[str], group_b: Iterable[str]) -> None:
    """Reject filters that populate keys from both groups at once.

    Raises:
        ExclusiveFieldsViolation: Names the first offending key of each group.
    """
    first = next((k for k in group_a if k in filter), None)
    if first is None:
        return
    second = next((k for k in group_b if k in filter), None)
    if second is not None:
        raise ExclusiveFieldsViolation(first, second)
