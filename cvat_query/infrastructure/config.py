from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def server_url() -> str:
    return env_str("CVAT_URL", "http://localhost:8080").rstrip("/")


def api_token() -> Optional[str]:
    token = os.getenv("CVAT_TOKEN", "").strip()
    return token or None


def max_pages() -> int:
    """
    Upper bound on the number of pages followed when a caller asks for
    flattened pagination. Defaults to 100 when CVAT_MAX_PAGES is not set or invalid.
    """
    try:
        value = int(env_str("CVAT_MAX_PAGES", "100"))
    except ValueError:
        return 100
    return value if value > 0 else 100


@dataclass(frozen=True)
class OrganizationContext:
    organization_id: Optional[int] = None
    organization_slug: Optional[str] = None


# Written only by activate/deactivate; read by the transport on every call.
_organization = OrganizationContext()


def current_organization() -> OrganizationContext:
    return _organization


def activate_organization(organization_id: int, organization_slug: str) -> OrganizationContext:
    global _organization
    _organization = OrganizationContext(organization_id, organization_slug)
    return _organization


def deactivate_organization() -> OrganizationContext:
    global _organization
    _organization = OrganizationContext()
    return _organization
