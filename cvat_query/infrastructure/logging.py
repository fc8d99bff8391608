from __future__ import annotations

import logging
import os

ROOT_LOGGER = "cvat_query"


def log_level() -> int:
    name = os.getenv("CVAT_QUERY_LOG_LEVEL", "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``cvat_query`` hierarchy; the package logger is configured once."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        root.addHandler(handler)
        root.setLevel(log_level())
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
