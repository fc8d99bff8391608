from __future__ import annotations

from typing import Any, Mapping

from ..assembler import assemble
from ..composer import compose
from ..dto import QualityConflictsRequest, QualityReportsRequest
from ..enrichment import results_of
from ..schemas import PERFORMANCE_REPORTS
from ..validation import check_exclusive, is_integer, is_string, validate
from ...domain.errors import ArgumentError, TransportError
from ...domain.interfaces import ServerProxy
from ...domain.models import AnalyticsReport, Collection, QualityConflict, QualityReport, QualitySettings
from ...infrastructure.logging import get_logger

logger = get_logger("cvat_query.analytics")

QUALITY_REPORT_FIELDS = {"taskId": is_integer, "jobId": is_integer, "target": is_string}
QUALITY_CONFLICT_FIELDS = {"reportId": is_integer}


class GetQualityReportsUseCase:
    """Use-case: quality reports of a task or job, newest first."""

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def execute(self, filter: Mapping[str, Any]) -> Collection[QualityReport]:
        validate(filter, QUALITY_REPORT_FIELDS)
        req = QualityReportsRequest(
            task_id=filter.get("taskId"),
            job_id=filter.get("jobId"),
            target=filter.get("target"),
        )
        params = req.to_params()
        logger.info("Quality reports | params=%s", params)
        data = await self._proxy.get("quality/reports", params, True)
        return assemble(results_of(data), QualityReport.from_raw)


class GetQualityConflictsUseCase:
    """Use-case: conflicts recorded by one quality report."""

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def execute(self, filter: Mapping[str, Any]) -> Collection[QualityConflict]:
        validate(filter, QUALITY_CONFLICT_FIELDS)
        params = QualityConflictsRequest(report_id=filter.get("reportId")).to_params()
        logger.info("Quality conflicts | params=%s", params)
        data = await self._proxy.get("quality/conflicts", params, True)
        return assemble(results_of(data), QualityConflict.from_raw)


class GetQualitySettingsUseCase:
    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def execute(self, task_id: int) -> QualitySettings:
        if not is_integer(task_id):
            raise ArgumentError(f"Task id must be an integer, got {task_id!r}")
        params = {"task_id": task_id}
        page = await self._proxy.list("quality/settings", params)
        records = results_of(page)
        if not records:
            raise TransportError("quality/settings", f"no quality settings for task {task_id}", params, 404)
        return QualitySettings.from_raw(records[0])


class GetPerformanceReportUseCase:
    """Use-case: performance analytics for one job, task or project.

    The target id and the date range cannot be combined in one request.
    """

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def execute(self, filter: Mapping[str, Any]) -> AnalyticsReport:
        schema = PERFORMANCE_REPORTS
        validate(filter, schema.fields)
        check_exclusive(filter, *schema.exclusive)
        params = compose(filter, schema)
        logger.info("Performance report | params=%s", params)
        data = await self._proxy.get(schema.kind, params)
        return AnalyticsReport.from_raw(data)
