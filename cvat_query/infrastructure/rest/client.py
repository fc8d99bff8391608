from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from ...domain.errors import TransportError
from ...domain.interfaces import Page, ServerProxy
from ...domain.models import RawRecord
from ..config import api_token, current_organization, max_pages, server_url
from ..logging import get_logger
from ..timeouts import http_timeout_seconds

logger = get_logger("cvat_query.rest")


class RestServerProxy(ServerProxy):
    """Server proxy adapter for the annotation server REST API (``/api/...``)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or server_url()).rstrip("/")
        self.session = session or requests.Session()
        self.token = token if token is not None else api_token()
        self.timeout = timeout or http_timeout_seconds()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.cvat+json"}
        if self.token:
            headers["Authorization"] = f"Token {self.token}"
        return headers

    def _params(self, params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        out = {k: v for k, v in (params or {}).items() if v is not None}
        org = current_organization()
        if org.organization_slug:
            out.setdefault("org", org.organization_slug)
        return out

    def _request(self, resource: str, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        sent = self._params(params) if params is not None else None
        logger.debug("GET %s | params=%s", url, sent)
        try:
            r = self.session.get(url, params=sent, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(resource, f"network error: {exc}", params) from exc
        if r.status_code >= 400:
            raise TransportError(resource, f"HTTP {r.status_code} {r.text}", params, r.status_code)
        try:
            return r.json()
        except ValueError as exc:
            raise TransportError(resource, "response is not JSON", params, r.status_code) from exc

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/{path.strip('/')}"

    def _get_page(self, kind: str, params: Mapping[str, Any]) -> Page:
        data = self._request(kind, self._url(kind), params) or {}
        if isinstance(data, list):
            return {"results": data, "count": len(data)}
        results = list(data.get("results") or [])
        return {"results": results, "count": int(data.get("count") or len(results))}

    def _get_all(self, kind: str, params: Mapping[str, Any]) -> List[RawRecord]:
        data = self._request(kind, self._url(kind), params) or {}
        if isinstance(data, list):
            return data
        out: List[RawRecord] = list(data.get("results") or [])
        next_url = data.get("next")
        pages, limit = 1, max_pages()
        while next_url and pages < limit:
            # ``next`` already carries every query param, org included
            data = self._request(kind, next_url) or {}
            out.extend(data.get("results") or [])
            next_url = data.get("next")
            pages += 1
        if next_url:
            logger.warning(
                "Page limit reached, results truncated | kind=%s | pages=%d | returned=%d", kind, pages, len(out)
            )
        return out

    async def list(self, kind: str, params: Mapping[str, Any]) -> Page:
        return await asyncio.to_thread(self._get_page, kind, params)

    async def get(
        self,
        kind: str,
        params: Mapping[str, Any],
        flatten_pagination: bool = False,
    ) -> Union[Page, List[RawRecord]]:
        if flatten_pagination:
            return await asyncio.to_thread(self._get_all, kind, params)
        return await asyncio.to_thread(self._request, kind, self._url(kind), params)

    async def get_self(self) -> RawRecord:
        return await asyncio.to_thread(self._request, "users", self._url("users/self"), {})

    async def get_one(self, kind: str, path_id: int, sub: Optional[str] = None) -> RawRecord:
        path = f"{kind}/{path_id}" + (f"/{sub}" if sub else "")
        return await asyncio.to_thread(self._request, kind, self._url(path), {})

    async def server_about(self) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request, "server", self._url("server/about"), {})

    async def server_share(self, directory: str, search_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"directory": directory, "search": search_prefix}
        return await asyncio.to_thread(self._request, "server", self._url("server/share"), params)

    async def search_project_names(self, search: str, limit: int) -> List[Dict[str, Any]]:
        params = {"names_only": True, "page": 1, "page_size": limit, "search": search}
        page = await asyncio.to_thread(self._get_page, "projects", params)
        return page["results"]
