from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from ..domain.models import Collection

T = TypeVar("T")


def assemble(
    records: Sequence[Mapping[str, Any]],
    constructor: Callable[[Mapping[str, Any]], T],
    count: Optional[int] = None,
) -> Collection[T]:
    """Wrap raw records into entities, preserving server order.

    ``count`` is the server-reported total for paginated listings; when it is
    None the collection length is used.
    """
    return Collection((constructor(r) for r in records), count=count)
