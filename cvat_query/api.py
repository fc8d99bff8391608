"""Public query surface.

``CVATQueryAPI`` groups the operations by resource the way callers address
them: ``api.tasks.get({"id": 42})``, ``api.analytics.quality.reports(...)``.
Each operation is a coroutine returning entities built from raw server JSON.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .application.dto import FramesMetaRequest
from .application.use_cases.analytics import (
    GetPerformanceReportUseCase,
    GetQualityConflictsUseCase,
    GetQualityReportsUseCase,
    GetQualitySettingsUseCase,
)
from .application.use_cases.get_resources import (
    GetCloudStoragesUseCase,
    GetJobsUseCase,
    GetOrganizationsUseCase,
    GetProjectsUseCase,
    GetTasksUseCase,
    GetUsersUseCase,
    GetWebhooksUseCase,
)
from .application.use_cases.server_info import GetFramesMetaUseCase, ServerInfoUseCase
from .domain.errors import ArgumentError
from .domain.interfaces import ServerProxy
from .domain.models import (
    AnalyticsReport,
    CloudStorage,
    Collection,
    FramesMetaData,
    Job,
    Organization,
    Project,
    QualityConflict,
    QualityReport,
    QualitySettings,
    Task,
    User,
    Webhook,
)
from .infrastructure import config
from .infrastructure.logging import get_logger
from .infrastructure.rest.client import RestServerProxy

logger = get_logger("cvat_query.api")


class _Users:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetUsersUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[User]:
        return await self._get.execute(filter or {})


class _Jobs:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetJobsUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[Job]:
        return await self._get.execute(filter or {})


class _Tasks:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetTasksUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[Task]:
        return await self._get.execute(filter or {})


class _Projects:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetProjectsUseCase(proxy)
        self._server = ServerInfoUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[Project]:
        return await self._get.execute(filter or {})

    async def search_names(self, search: str, limit: int) -> List[Dict[str, Any]]:
        return await self._server.search_project_names(search, limit)


class _CloudStorages:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetCloudStoragesUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[CloudStorage]:
        return await self._get.execute(filter or {})


class _Organizations:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetOrganizationsUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[Organization]:
        return await self._get.execute(filter or {})

    def activate(self, organization: Organization) -> config.OrganizationContext:
        """Make ``organization`` the context of every following request."""
        if not isinstance(organization, Organization):
            raise ArgumentError(
                f'"organization" is expected to be an Organization, got {type(organization).__name__}'
            )
        logger.info("Organization activated | slug=%s", organization.slug)
        return config.activate_organization(organization.id, organization.slug)

    def deactivate(self) -> config.OrganizationContext:
        logger.info("Organization deactivated")
        return config.deactivate_organization()


class _Webhooks:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetWebhooksUseCase(proxy)

    async def get(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[Webhook]:
        return await self._get.execute(filter or {})


class _QualitySettings:
    def __init__(self, proxy: ServerProxy) -> None:
        self._get = GetQualitySettingsUseCase(proxy)

    async def get(self, task_id: int) -> QualitySettings:
        return await self._get.execute(task_id)


class _Quality:
    def __init__(self, proxy: ServerProxy) -> None:
        self._reports = GetQualityReportsUseCase(proxy)
        self._conflicts = GetQualityConflictsUseCase(proxy)
        self.settings = _QualitySettings(proxy)

    async def reports(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[QualityReport]:
        return await self._reports.execute(filter or {})

    async def conflicts(self, filter: Optional[Mapping[str, Any]] = None) -> Collection[QualityConflict]:
        return await self._conflicts.execute(filter or {})


class _Performance:
    def __init__(self, proxy: ServerProxy) -> None:
        self._reports = GetPerformanceReportUseCase(proxy)

    async def reports(self, filter: Optional[Mapping[str, Any]] = None) -> AnalyticsReport:
        return await self._reports.execute(filter or {})


class _Analytics:
    def __init__(self, proxy: ServerProxy) -> None:
        self.quality = _Quality(proxy)
        self.performance = _Performance(proxy)


class _Frames:
    def __init__(self, proxy: ServerProxy) -> None:
        self._meta = GetFramesMetaUseCase(proxy)

    async def get_meta(self, type: str, id: int) -> FramesMetaData:
        return await self._meta.execute(FramesMetaRequest(type=type, id=id))


class _Server:
    def __init__(self, proxy: ServerProxy) -> None:
        self._info = ServerInfoUseCase(proxy)

    async def about(self) -> Dict[str, Any]:
        return await self._info.about()

    async def share(self, directory: str = "/", search_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._info.share(directory, search_prefix)


class CVATQueryAPI:
    """Query operations over one server proxy (REST by default)."""

    def __init__(self, proxy: Optional[ServerProxy] = None) -> None:
        self.proxy = proxy or RestServerProxy()
        self.users = _Users(self.proxy)
        self.jobs = _Jobs(self.proxy)
        self.tasks = _Tasks(self.proxy)
        self.projects = _Projects(self.proxy)
        self.cloud_storages = _CloudStorages(self.proxy)
        self.organizations = _Organizations(self.proxy)
        self.webhooks = _Webhooks(self.proxy)
        self.analytics = _Analytics(self.proxy)
        self.frames = _Frames(self.proxy)
        self.server = _Server(self.proxy)
