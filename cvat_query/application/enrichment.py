from __future__ import annotations

from typing import Any, Awaitable, Dict, List, Mapping, Union

import anyio

from ..domain.interfaces import ServerProxy
from ..domain.models import RawRecord
from ..infrastructure.logging import get_logger

logger = get_logger("cvat_query.enrichment")


def results_of(payload: Union[Mapping[str, Any], List[RawRecord]]) -> List[RawRecord]:
    """Records of a listing payload, whether paged (``{"results": ...}``) or flattened."""
    if isinstance(payload, list):
        return payload
    return list(payload.get("results") or [])


async def run_scoped(steps: Mapping[str, Awaitable[Any]]) -> Dict[str, Any]:
    """Run named steps concurrently and return their results by name.

    The first failing step cancels the others and its exception is re-raised
    unchanged. Nothing is left running when this returns or raises.
    """
    results: Dict[str, Any] = {}

    async def _run(name: str, step: Awaitable[Any]) -> None:
        results[name] = await step

    try:
        async with anyio.create_task_group() as tg:
            for name, step in steps.items():
                tg.start_soon(_run, name, step)
    except BaseExceptionGroup as group:
        # Siblings were cancelled by the group; only the failures are collected
        first = group.exceptions[0]
        while isinstance(first, BaseExceptionGroup):
            first = first.exceptions[0]
        logger.debug("Enrichment step failed | error=%r", first)
        raise first
    return {name: results[name] for name in steps}


class EnrichmentOrchestrator:
    """Attach related sub-resources to a primary record.

    Enrichment happens only for identity lookups; listings stay bare to avoid
    one extra request per row. The task ``jobs`` summary is always moved to
    ``progress``.
    """

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def _labels(self, owner_param: str, owner_id: int) -> List[RawRecord]:
        logger.debug("Fetching labels | %s=%s", owner_param, owner_id)
        return results_of(await self._proxy.get("labels", {owner_param: owner_id}, True))

    async def _jobs(self, task_id: int) -> List[RawRecord]:
        logger.debug("Fetching jobs | task_id=%s", task_id)
        return results_of(await self._proxy.get("jobs", {"task_id": task_id}, True))

    async def enrich(self, kind: str, primary: RawRecord, was_identity_lookup: bool) -> RawRecord:
        record: RawRecord = dict(primary)
        if kind == "tasks":
            record["progress"] = primary.get("jobs")

        if not was_identity_lookup:
            return record

        if kind == "jobs":
            related = await run_scoped({"labels": self._labels("job_id", primary["id"])})
        elif kind == "tasks":
            related = await run_scoped({
                "labels": self._labels("task_id", primary["id"]),
                "jobs": self._jobs(primary["id"]),
            })
        elif kind == "projects":
            related = await run_scoped({"labels": self._labels("project_id", primary["id"])})
        else:
            return record

        record.update(related)
        return record
