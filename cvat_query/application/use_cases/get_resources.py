from __future__ import annotations

from typing import Any, Callable, Generic, List, Mapping, TypeVar

from ..assembler import assemble
from ..composer import build_query
from ..dto import ById, Search, SelfLookup
from ..enrichment import EnrichmentOrchestrator, results_of
from ..schemas import CLOUD_STORAGES, JOBS, ORGANIZATIONS, PROJECTS, TASKS, USERS, WEBHOOKS, FilterSchema
from ...domain.interfaces import ServerProxy
from ...domain.models import (
    CloudStorage,
    Collection,
    Job,
    Organization,
    Project,
    RawRecord,
    Task,
    User,
    Webhook,
)
from ...infrastructure.logging import get_logger

logger = get_logger("cvat_query.use_cases")

E = TypeVar("E")


class GetResourcesUseCase(Generic[E]):
    """Use-case: validate a filter, fetch one page, enrich identity lookups, assemble entities."""

    schema: FilterSchema
    constructor: Callable[[Mapping[str, Any]], E]

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy
        self._enrichment = EnrichmentOrchestrator(proxy)

    async def execute(self, filter: Mapping[str, Any]) -> Collection[E]:
        """
        Runs one query for the resource kind of this use-case.

        Validation happens before any remote call, so a rejected filter never
        produces network traffic. Identity lookups return zero or one entity;
        an empty collection means "not found".

        Args:
            filter: Caller filter; keys and types per the resource schema.

        Returns:
            Collection of entities with ``count`` set to the server total for
            paginated listings and to the collection length otherwise.

        Raises:
            QueryValidationError: The filter was rejected.
            TransportError: A primary or enrichment fetch failed.
        """
        kind = self.schema.kind
        query = build_query(filter, self.schema)

        if isinstance(query, SelfLookup):
            logger.info("Query | kind=%s | self", kind)
            record = await self._proxy.get_self()
            return assemble([record], type(self).constructor)

        logger.info("Query | kind=%s | shape=%s | params=%s", kind, type(query).__name__, query.params)
        page = await self._proxy.list(kind, query.params)
        identity = isinstance(query, ById)
        records: List[RawRecord] = [
            await self._enrichment.enrich(kind, raw, identity) for raw in results_of(page)
        ]

        count = page.get("count") if isinstance(query, Search) and query.paginated else None
        logger.info("Query done | kind=%s | returned=%d | count=%s", kind, len(records), count)
        return assemble(records, type(self).constructor, count)


class GetUsersUseCase(GetResourcesUseCase[User]):
    schema = USERS
    constructor = User.from_raw


class GetJobsUseCase(GetResourcesUseCase[Job]):
    schema = JOBS
    constructor = Job.from_raw


class GetTasksUseCase(GetResourcesUseCase[Task]):
    schema = TASKS
    constructor = Task.from_raw


class GetProjectsUseCase(GetResourcesUseCase[Project]):
    schema = PROJECTS
    constructor = Project.from_raw


class GetCloudStoragesUseCase(GetResourcesUseCase[CloudStorage]):
    schema = CLOUD_STORAGES
    constructor = CloudStorage.from_raw


class GetOrganizationsUseCase(GetResourcesUseCase[Organization]):
    schema = ORGANIZATIONS
    constructor = Organization.from_raw


class GetWebhooksUseCase(GetResourcesUseCase[Webhook]):
    schema = WEBHOOKS
    constructor = Webhook.from_raw
