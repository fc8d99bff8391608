from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, TypeVar

RawRecord = Dict[str, Any]

T = TypeVar("T")


class Collection(list, Generic[T]):
    """Ordered entities plus the server-side total of matching records.

    ``count`` is the total across all pages, so it is never smaller than
    ``len(self)``; without pagination the two are equal.
    """

    def __init__(self, items: Iterable[T] = (), count: Optional[int] = None) -> None:
        super().__init__(items)
        self.count = len(self) if count is None else max(int(count), len(self))

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [it.to_dict() if hasattr(it, "to_dict") else it for it in self]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def _dump(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    return value


class _Entity:
    """Shared ``to_dict`` for entities: camelCase keys, nested entities dumped."""

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(k): _dump(v) for k, v in self.__dict__.items()}


def _user_ref(raw: Any) -> Optional[Dict[str, Any]]:
    """Owners/assignees arrive as nested user objects or null."""
    if not isinstance(raw, Mapping):
        return None
    return {"id": raw.get("id"), "username": raw.get("username")}


@dataclass(frozen=True)
class Label(_Entity):
    """A label attached to a project, task or job.

    Fields:
        id: Server label id.
        name: Label name (unique within its owner).
        color: Hex color string, may be empty.
        type: Shape type restriction (``any``, ``rectangle``, ``skeleton``...).
        attributes: Raw attribute specs, passed through unchanged.
    """
    id: int
    name: str
    color: str = ""
    type: str = "any"
    attributes: List[Dict[str, Any]] = field(default_factory=list)
    parent_id: Optional[int] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Label":
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            color=raw.get("color") or "",
            type=raw.get("type") or "any",
            attributes=list(raw.get("attributes") or []),
            parent_id=raw.get("parent_id"),
        )


def _labels(raw: Mapping[str, Any]) -> List[Label]:
    return [Label.from_raw(it) for it in (raw.get("labels") or []) if isinstance(it, Mapping)]


@dataclass(frozen=True)
class User(_Entity):
    id: int
    username: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    is_active: bool = True
    is_staff: bool = False
    is_superuser: bool = False
    groups: List[str] = field(default_factory=list)
    date_joined: Optional[str] = None
    last_login: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "User":
        return cls(
            id=raw["id"],
            username=raw.get("username", ""),
            first_name=raw.get("first_name") or "",
            last_name=raw.get("last_name") or "",
            email=raw.get("email") or "",
            is_active=bool(raw.get("is_active", True)),
            is_staff=bool(raw.get("is_staff", False)),
            is_superuser=bool(raw.get("is_superuser", False)),
            groups=list(raw.get("groups") or []),
            date_joined=raw.get("date_joined"),
            last_login=raw.get("last_login"),
        )


@dataclass(frozen=True)
class Job(_Entity):
    id: int
    task_id: Optional[int] = None
    project_id: Optional[int] = None
    type: str = "annotation"
    stage: str = ""
    state: str = ""
    start_frame: int = 0
    stop_frame: int = 0
    frame_count: int = 0
    assignee: Optional[Dict[str, Any]] = None
    updated_date: Optional[str] = None
    labels: List[Label] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Job":
        return cls(
            id=raw["id"],
            task_id=raw.get("task_id"),
            project_id=raw.get("project_id"),
            type=raw.get("type") or "annotation",
            stage=raw.get("stage") or "",
            state=raw.get("state") or "",
            start_frame=int(raw.get("start_frame") or 0),
            stop_frame=int(raw.get("stop_frame") or 0),
            frame_count=int(raw.get("frame_count") or 0),
            assignee=_user_ref(raw.get("assignee")),
            updated_date=raw.get("updated_date"),
            labels=_labels(raw),
        )


@dataclass(frozen=True)
class Task(_Entity):
    """Annotation task.

    ``progress`` is the job summary the listing payload carries under ``jobs``
    (``count``/``completed``/``validation``); ``jobs`` holds full Job entities
    and is only populated on identity lookup.
    """
    id: int
    name: str = ""
    project_id: Optional[int] = None
    status: str = ""
    mode: str = ""
    size: int = 0
    subset: str = ""
    owner: Optional[Dict[str, Any]] = None
    assignee: Optional[Dict[str, Any]] = None
    created_date: Optional[str] = None
    updated_date: Optional[str] = None
    progress: Dict[str, Any] = field(default_factory=dict)
    jobs: List[Job] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Task":
        progress = raw.get("progress")
        jobs = raw.get("jobs")
        return cls(
            id=raw["id"],
            name=raw.get("name") or "",
            project_id=raw.get("project_id"),
            status=raw.get("status") or "",
            mode=raw.get("mode") or "",
            size=int(raw.get("size") or 0),
            subset=raw.get("subset") or "",
            owner=_user_ref(raw.get("owner")),
            assignee=_user_ref(raw.get("assignee")),
            created_date=raw.get("created_date"),
            updated_date=raw.get("updated_date"),
            progress=dict(progress) if isinstance(progress, Mapping) else {},
            jobs=[Job.from_raw(j) for j in jobs] if isinstance(jobs, list) else [],
            labels=_labels(raw),
        )


@dataclass(frozen=True)
class Project(_Entity):
    id: int
    name: str = ""
    status: str = ""
    owner: Optional[Dict[str, Any]] = None
    assignee: Optional[Dict[str, Any]] = None
    bug_tracker: str = ""
    created_date: Optional[str] = None
    updated_date: Optional[str] = None
    labels: List[Label] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Project":
        return cls(
            id=raw["id"],
            name=raw.get("name") or "",
            status=raw.get("status") or "",
            owner=_user_ref(raw.get("owner")),
            assignee=_user_ref(raw.get("assignee")),
            bug_tracker=raw.get("bug_tracker") or "",
            created_date=raw.get("created_date"),
            updated_date=raw.get("updated_date"),
            labels=_labels(raw),
        )


@dataclass(frozen=True)
class CloudStorage(_Entity):
    id: int
    display_name: str = ""
    provider_type: str = ""
    resource: str = ""
    credentials_type: str = ""
    description: str = ""
    owner: Optional[Dict[str, Any]] = None
    manifests: List[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "CloudStorage":
        return cls(
            id=raw["id"],
            display_name=raw.get("display_name") or "",
            provider_type=raw.get("provider_type") or "",
            resource=raw.get("resource") or "",
            credentials_type=raw.get("credentials_type") or "",
            description=raw.get("description") or "",
            owner=_user_ref(raw.get("owner")),
            manifests=list(raw.get("manifests") or []),
        )


@dataclass(frozen=True)
class Organization(_Entity):
    id: int
    slug: str
    name: str = ""
    description: str = ""
    owner: Optional[Dict[str, Any]] = None
    contact: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Organization":
        return cls(
            id=raw["id"],
            slug=raw.get("slug") or "",
            name=raw.get("name") or "",
            description=raw.get("description") or "",
            owner=_user_ref(raw.get("owner")),
            contact=dict(raw.get("contact") or {}),
        )


@dataclass(frozen=True)
class Webhook(_Entity):
    id: int
    target_url: str = ""
    type: str = ""
    content_type: str = "application/json"
    enable: bool = True
    events: List[str] = field(default_factory=list)
    project_id: Optional[int] = None
    organization: Optional[int] = None
    last_status: int = 0
    last_delivery_date: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Webhook":
        return cls(
            id=raw["id"],
            target_url=raw.get("target_url") or "",
            type=raw.get("type") or "",
            content_type=raw.get("content_type") or "application/json",
            enable=bool(raw.get("enable", True)),
            events=list(raw.get("events") or []),
            project_id=raw.get("project_id"),
            organization=raw.get("organization"),
            last_status=int(raw.get("last_status") or 0),
            last_delivery_date=raw.get("last_delivery_date"),
        )


@dataclass(frozen=True)
class QualityReport(_Entity):
    id: int
    target: str = ""
    parent_id: Optional[int] = None
    task_id: Optional[int] = None
    job_id: Optional[int] = None
    created_date: Optional[str] = None
    summary: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "QualityReport":
        return cls(
            id=raw["id"],
            target=raw.get("target") or "",
            parent_id=raw.get("parent_id"),
            task_id=raw.get("task_id"),
            job_id=raw.get("job_id"),
            created_date=raw.get("created_date"),
            summary=dict(raw.get("summary") or {}),
        )


@dataclass(frozen=True)
class QualityConflict(_Entity):
    id: int
    frame: int = 0
    type: str = ""
    severity: str = ""
    report_id: Optional[int] = None
    annotation_ids: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "QualityConflict":
        return cls(
            id=raw["id"],
            frame=int(raw.get("frame") or 0),
            type=raw.get("type") or "",
            severity=raw.get("severity") or "",
            report_id=raw.get("report_id"),
            annotation_ids=list(raw.get("annotation_ids") or []),
        )


@dataclass(frozen=True)
class QualitySettings(_Entity):
    """Per-task quality settings; unknown server fields land in ``extra``."""
    id: int
    task_id: int
    iou_threshold: float = 0.4
    oks_sigma: float = 0.09
    low_overlap_threshold: float = 0.8
    compare_attributes: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ("id", "task_id", "iou_threshold", "oks_sigma", "low_overlap_threshold", "compare_attributes")

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "QualitySettings":
        return cls(
            id=raw["id"],
            task_id=raw["task_id"],
            iou_threshold=float(raw.get("iou_threshold", 0.4)),
            oks_sigma=float(raw.get("oks_sigma", 0.09)),
            low_overlap_threshold=float(raw.get("low_overlap_threshold", 0.8)),
            compare_attributes=bool(raw.get("compare_attributes", True)),
            extra={k: v for k, v in raw.items() if k not in cls._KNOWN},
        )


@dataclass(frozen=True)
class AnalyticsReport(_Entity):
    target: str
    created_date: Optional[str] = None
    job_id: Optional[int] = None
    task_id: Optional[int] = None
    project_id: Optional[int] = None
    statistics: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "AnalyticsReport":
        return cls(
            target=raw.get("target") or "",
            created_date=raw.get("created_date"),
            job_id=raw.get("job_id"),
            task_id=raw.get("task_id"),
            project_id=raw.get("project_id"),
            statistics=list(raw.get("statistics") or []),
        )


@dataclass(frozen=True)
class FramesMetaData(_Entity):
    chunk_size: int = 0
    size: int = 0
    start_frame: int = 0
    stop_frame: int = 0
    frame_filter: str = ""
    image_quality: int = 0
    frames: List[Dict[str, Any]] = field(default_factory=list)
    deleted_frames: List[int] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "FramesMetaData":
        return cls(
            chunk_size=int(raw.get("chunk_size") or 0),
            size=int(raw.get("size") or 0),
            start_frame=int(raw.get("start_frame") or 0),
            stop_frame=int(raw.get("stop_frame") or 0),
            frame_filter=raw.get("frame_filter") or "",
            image_quality=int(raw.get("image_quality") or 0),
            frames=list(raw.get("frames") or []),
            deleted_frames=[int(f) for f in (raw.get("deleted_frames") or [])],
        )
