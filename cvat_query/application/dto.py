from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ById:
    """Identity lookup: at most one record, enriched for jobs/tasks/projects.

    ``params`` are the server params of the lookup, ``id`` included.
    """
    id: int
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Search:
    """Listing/search; ``paginated`` when a page key was supplied."""
    params: Dict[str, Any] = field(default_factory=dict)
    paginated: bool = False


@dataclass(frozen=True)
class SelfLookup:
    """The caller's own user record (``users`` only)."""


Query = Union[ById, Search, SelfLookup]


@dataclass(frozen=True)
class QualityReportsRequest:
    task_id: Optional[int] = None
    job_id: Optional[int] = None
    target: Optional[str] = None

    def to_params(self) -> Dict[str, Any]:
        if self.job_id is not None:
            return {"job_id": self.job_id, "sort": "-created_date", "target": self.target}
        if self.task_id is not None:
            return {"task_id": self.task_id, "sort": "-created_date", "target": self.target}
        return {}


@dataclass(frozen=True)
class QualityConflictsRequest:
    report_id: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        return {} if self.report_id is None else {"report_id": self.report_id}


@dataclass(frozen=True)
class FramesMetaRequest:
    type: str
    id: int
