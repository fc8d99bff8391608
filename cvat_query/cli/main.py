from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional, Sequence

from ..api import CVATQueryAPI
from ..domain.errors import ArgumentError, QueryValidationError, TransportError
from ..domain.models import Collection
from ..infrastructure.logging import get_logger
from .parsers import build_parser

logger = get_logger("cvat_query.cli")


def _filter_from(ns) -> Dict[str, Any]:
    """Namespace -> filter mapping; only options the user actually passed."""
    return {k: v for k, v in vars(ns).items() if k != "cmd"}


def _serialize(result: object) -> Dict[str, Any]:
    if isinstance(result, Collection):
        return {"status": "ok", "count": result.count, "result": result.to_dicts()}
    if hasattr(result, "to_dict"):
        return {"status": "ok", "result": result.to_dict()}
    return {"status": "ok", "result": result}


async def dispatch_commands(ns, api: CVATQueryAPI):
    """
    Dispatches a parsed CLI command to the matching query operation.

    Commands:
    - users, jobs, tasks, projects, cloudstorages, organizations, webhooks: filtered listings / identity lookups
    - quality-reports, quality-conflicts, quality-settings, performance-reports: analytics
    - frames-meta: frame metadata of a job or task
    - about: server description
    """
    flt = _filter_from(ns)
    if ns.cmd == "users":
        return await api.users.get(flt)
    if ns.cmd == "jobs":
        return await api.jobs.get(flt)
    if ns.cmd == "tasks":
        return await api.tasks.get(flt)
    if ns.cmd == "projects":
        return await api.projects.get(flt)
    if ns.cmd == "cloudstorages":
        return await api.cloud_storages.get(flt)
    if ns.cmd == "organizations":
        return await api.organizations.get(flt)
    if ns.cmd == "webhooks":
        return await api.webhooks.get(flt)
    if ns.cmd == "quality-reports":
        return await api.analytics.quality.reports(flt)
    if ns.cmd == "quality-conflicts":
        return await api.analytics.quality.conflicts(flt)
    if ns.cmd == "quality-settings":
        return await api.analytics.quality.settings.get(ns.task_id)
    if ns.cmd == "performance-reports":
        return await api.analytics.performance.reports(flt)
    if ns.cmd == "frames-meta":
        return await api.frames.get_meta(ns.type, ns.id)
    if ns.cmd == "about":
        return await api.server.about()
    raise ArgumentError(f"Unknown cmd: {ns.cmd}")


def run(argv: Optional[Sequence[str]] = None, api: Optional[CVATQueryAPI] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    api = api or CVATQueryAPI()

    try:
        result = asyncio.run(dispatch_commands(ns, api))
    except (QueryValidationError, ArgumentError) as ex:
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 2
    except TransportError as ex:
        logger.error("Request failed | resource=%s | status=%s", ex.resource, ex.status_code)
        print(json.dumps({"status": "error", "error": str(ex), "resource": ex.resource}))
        return 3
    except Exception as ex:  # keep CLI concise and user-friendly
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 3

    print(json.dumps(_serialize(result), indent=2))
    return 0


def main() -> int:
    import sys

    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
