from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from .validation import TypeCheck, is_boolean, is_integer, is_string


@dataclass(frozen=True)
class FilterSchema:
    """Recognized filter shape of one resource kind.

    Fields:
        kind: Server resource name (``tasks``, ``jobs``...).
        fields: Recognized key -> type predicate.
        exclusive: Identity-lookup keys vs search/pagination keys, or None.
        forward: Keys copied verbatim into the query params.
        rename: camelCase filter key -> snake_case server param.
        expression_fields: Keys folded into the ``filter`` expression as
            ``var == value`` clauses instead of being sent as params.
        identity_key: Key that turns the call into an identity lookup.
        identity_only: An identity lookup sends nothing but the id.
        pagination: Keys whose presence makes the call paginated.
        drop_falsy: Skip keys whose value is falsy (users search).
    """
    kind: str
    fields: Mapping[str, TypeCheck]
    exclusive: Optional[Tuple[Tuple[str, ...], Tuple[str, ...]]] = None
    forward: Tuple[str, ...] = ()
    rename: Mapping[str, str] = field(default_factory=dict)
    expression_fields: Mapping[str, str] = field(default_factory=dict)
    identity_key: Optional[str] = None
    identity_only: bool = False
    pagination: Tuple[str, ...] = ("page",)
    drop_falsy: bool = False


USERS = FilterSchema(
    kind="users",
    fields={
        "id": is_integer,
        "is_active": is_boolean,
        "self": is_boolean,
        "search": is_string,
        "limit": is_integer,
    },
    forward=("id", "is_active", "search", "limit"),
    pagination=(),
    drop_falsy=True,
)

JOBS = FilterSchema(
    kind="jobs",
    fields={
        "page": is_integer,
        "filter": is_string,
        "sort": is_string,
        "search": is_string,
        "jobID": is_integer,
        "taskID": is_integer,
        "type": is_string,
    },
    exclusive=(("jobID", "filter", "search"), ("page", "sort")),
    forward=("page", "sort", "search", "filter", "type"),
    rename={"jobID": "id", "taskID": "task_id"},
    identity_key="jobID",
    identity_only=True,
)

TASKS = FilterSchema(
    kind="tasks",
    fields={
        "page": is_integer,
        "projectId": is_integer,
        "id": is_integer,
        "sort": is_string,
        "search": is_string,
        "filter": is_string,
        "ordering": is_string,
    },
    exclusive=(("id",), ("page",)),
    forward=("page", "id", "sort", "search", "filter", "ordering"),
    expression_fields={"projectId": "project_id"},
    identity_key="id",
)

PROJECTS = FilterSchema(
    kind="projects",
    fields={
        "id": is_integer,
        "page": is_integer,
        "search": is_string,
        "sort": is_string,
        "filter": is_string,
    },
    exclusive=(("id",), ("page",)),
    forward=("page", "id", "sort", "search", "filter"),
    identity_key="id",
)

CLOUD_STORAGES = FilterSchema(
    kind="cloudstorages",
    fields={
        "page": is_integer,
        "filter": is_string,
        "sort": is_string,
        "id": is_integer,
        "search": is_string,
    },
    exclusive=(("id", "search"), ("page",)),
    forward=("page", "filter", "sort", "id", "search"),
    identity_key="id",
)

ORGANIZATIONS = FilterSchema(
    kind="organizations",
    fields={
        "search": is_string,
        "filter": is_string,
    },
    forward=("search", "filter"),
    pagination=(),
)

WEBHOOKS = FilterSchema(
    kind="webhooks",
    fields={
        "page": is_integer,
        "id": is_integer,
        "projectId": is_integer,
        "filter": is_string,
        "search": is_string,
        "sort": is_string,
    },
    exclusive=(("id", "projectId"), ("page",)),
    forward=("page", "id", "filter", "search", "sort"),
    rename={"projectId": "project_id"},
    identity_key="id",
)

PERFORMANCE_REPORTS = FilterSchema(
    kind="analytics/reports",
    fields={
        "jobID": is_integer,
        "taskID": is_integer,
        "projectID": is_integer,
        "startDate": is_string,
        "endDate": is_string,
    },
    exclusive=(("jobID", "taskID", "projectID"), ("startDate", "endDate")),
    rename={
        "jobID": "job_id",
        "taskID": "task_id",
        "projectID": "project_id",
        "startDate": "start_date",
        "endDate": "end_date",
    },
    pagination=(),
)

SCHEMAS: Dict[str, FilterSchema] = {
    s.kind: s
    for s in (USERS, JOBS, TASKS, PROJECTS, CLOUD_STORAGES, ORGANIZATIONS, WEBHOOKS, PERFORMANCE_REPORTS)
}
