from __future__ import annotations

from .config import env_str


def http_timeout_seconds() -> float:
    try:
        value = float(env_str("CVAT_HTTP_TIMEOUT", "15"))
    except ValueError:
        return 15.0
    return value if value > 0 else 15.0
