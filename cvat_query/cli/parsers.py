from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Query resources of a CVAT annotation server")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Omitted options stay out of the namespace so they never reach the filter
    us = add_subparser(sub, "users")
    us.add_argument("--id", type=int)
    us.add_argument("--is-active", dest="is_active", action="store_true")
    us.add_argument("--self", dest="self", action="store_true", help="Fetch the authenticated user only")
    us.add_argument("--search")
    us.add_argument("--limit", type=int)

    jb = add_subparser(sub, "jobs", searchable=True)
    jb.add_argument("--job-id", dest="jobID", type=int)
    jb.add_argument("--task-id", dest="taskID", type=int)
    jb.add_argument("--type")

    tk = add_subparser(sub, "tasks", searchable=True)
    tk.add_argument("--id", type=int)
    tk.add_argument("--project-id", dest="projectId", type=int)
    tk.add_argument("--ordering")

    pr = add_subparser(sub, "projects", searchable=True)
    pr.add_argument("--id", type=int)

    cs = add_subparser(sub, "cloudstorages", searchable=True)
    cs.add_argument("--id", type=int)

    og = add_subparser(sub, "organizations")
    og.add_argument("--search")
    og.add_argument("--filter", help="JSON-logic filter expression")

    wh = add_subparser(sub, "webhooks", searchable=True)
    wh.add_argument("--id", type=int)
    wh.add_argument("--project-id", dest="projectId", type=int)

    qr = add_subparser(sub, "quality-reports")
    qr.add_argument("--task-id", dest="taskId", type=int)
    qr.add_argument("--job-id", dest="jobId", type=int)
    qr.add_argument("--target", choices=["task", "job"])

    qc = add_subparser(sub, "quality-conflicts")
    qc.add_argument("--report-id", dest="reportId", type=int)

    qs = add_subparser(sub, "quality-settings")
    qs.add_argument("--task-id", dest="task_id", type=int, required=True)

    pf = add_subparser(sub, "performance-reports")
    pf.add_argument("--job-id", dest="jobID", type=int)
    pf.add_argument("--task-id", dest="taskID", type=int)
    pf.add_argument("--project-id", dest="projectID", type=int)
    pf.add_argument("--start-date", dest="startDate")
    pf.add_argument("--end-date", dest="endDate")

    fm = add_subparser(sub, "frames-meta")
    fm.add_argument("--type", required=True, choices=["job", "task"])
    fm.add_argument("--id", type=int, required=True)

    add_subparser(sub, "about")

    return ap


def add_subparser(sub, name, searchable=False):
    """
    Adds a resource subcommand whose options are omitted from the namespace unless given.

    Args:
        sub: The subparsers object from argparse.
        name: The subcommand name.
        searchable: Add the common listing options (page, sort, search, filter).

    Returns:
        argparse.ArgumentParser: The configured subparser.
    """
    result = sub.add_parser(name, argument_default=argparse.SUPPRESS)
    if searchable:
        result.add_argument("--page", type=int)
        result.add_argument("--sort", help="Sort field; use --sort=-field for descending order")
        result.add_argument("--search")
        result.add_argument("--filter", help="JSON-logic filter expression")
    return result
