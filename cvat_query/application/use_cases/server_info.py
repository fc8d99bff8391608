from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..dto import FramesMetaRequest
from ..validation import is_integer
from ...domain.errors import ArgumentError
from ...domain.interfaces import ServerProxy
from ...domain.models import FramesMetaData


class GetFramesMetaUseCase:
    """Use-case: frame metadata (chunking, frame list, deleted frames) of a job or task."""

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def execute(self, req: FramesMetaRequest) -> FramesMetaData:
        if req.type not in ("job", "task"):
            raise ArgumentError(f'Frames meta type must be "job" or "task", got {req.type!r}')
        if not is_integer(req.id):
            raise ArgumentError(f"Frames meta id must be an integer, got {req.id!r}")
        raw = await self._proxy.get_one(f"{req.type}s", req.id, "data/meta")
        return FramesMetaData.from_raw(raw)


class ServerInfoUseCase:
    """Pass-through server endpoints that need light reshaping."""

    def __init__(self, proxy: ServerProxy) -> None:
        self._proxy = proxy

    async def about(self) -> Dict[str, Any]:
        return await self._proxy.server_about()

    async def share(self, directory: str = "/", search_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        items = await self._proxy.server_share(directory, search_prefix)
        out: List[Dict[str, Any]] = []
        for it in items:
            entry = {k: v for k, v in it.items() if k != "mime_type"}
            entry["mimeType"] = it.get("mime_type")
            out.append(entry)
        return out

    async def search_project_names(self, search: str, limit: int) -> List[Dict[str, Any]]:
        return await self._proxy.search_project_names(search, limit)
