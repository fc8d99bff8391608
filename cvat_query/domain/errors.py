from __future__ import annotations

from typing import Any, Mapping, Optional


class QueryValidationError(ValueError):
    """Raised when a caller filter is rejected before any remote call."""


class UnknownFilterField(QueryValidationError):
    """Raised when a filter carries a key the resource does not recognize."""

    def __init__(self, field: str) -> None:
        super().__init__(f'Unsupported filter property has been received: "{field}"')
        self.field = field


class InvalidFilterFieldType(QueryValidationError):
    """Raised when a filter value does not satisfy the field's type predicate."""

    def __init__(self, field: str, expected: str, value: Any) -> None:
        super().__init__(
            f'Received filter property "{field}" is not satisfied for checker '
            f"({expected}), got {type(value).__name__}"
        )
        self.field = field
        self.expected = expected
        self.value = value


class ExclusiveFieldsViolation(QueryValidationError):
    """Raised when identity-lookup keys and search keys are combined."""

    def __init__(self, first: str, second: str) -> None:
        super().__init__(f'Do not use the filter field "{first}" with "{second}"')
        self.fields = (first, second)


class MalformedFilterExpression(QueryValidationError):
    """Raised when a serialized filter expression cannot be parsed."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Malformed filter expression {source!r}: {reason}")
        self.source = source
        self.reason = reason


class ArgumentError(ValueError):
    """Raised when a narrow operation receives an argument of the wrong kind."""


class TransportError(RuntimeError):
    """Raised when the remote resource server call fails.

    Fields:
        resource: Server resource the failed call targeted (e.g. ``labels``).
        params: Query parameters sent with the call.
        status_code: HTTP status, when the server answered at all.
    """

    def __init__(
        self,
        resource: str,
        message: str,
        params: Optional[Mapping[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(f"{resource}: {message}")
        self.resource = resource
        self.params = dict(params or {})
        self.status_code = status_code
