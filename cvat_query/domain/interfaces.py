from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Union

from .models import RawRecord

Page = Dict[str, Any]
"""One listing page: ``{"results": [RawRecord, ...], "count": int}``."""


class ServerProxy(ABC):
    """Port for the remote annotation server (e.g. the REST API).

    Every method is a coroutine returning raw JSON; failures surface as
    ``TransportError`` and are never retried here.
    """

    @abstractmethod
    async def list(self, kind: str, params: Mapping[str, Any]) -> Page:
        """Fetch one listing page of ``kind`` filtered by ``params``."""
        raise NotImplementedError

    @abstractmethod
    async def get(
        self,
        kind: str,
        params: Mapping[str, Any],
        flatten_pagination: bool = False,
    ) -> Union[Page, List[RawRecord]]:
        """Fetch ``kind`` records.

        With ``flatten_pagination`` every page is followed and the
        concatenated results are returned as a plain list.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_self(self) -> RawRecord:
        """Fetch the identity record of the authenticated user."""
        raise NotImplementedError

    @abstractmethod
    async def get_one(self, kind: str, path_id: int, sub: Optional[str] = None) -> RawRecord:
        """Fetch a single object by path (``/kind/{path_id}[/sub]``)."""
        raise NotImplementedError

    @abstractmethod
    async def server_about(self) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def server_share(self, directory: str, search_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    async def search_project_names(self, search: str, limit: int) -> List[Dict[str, Any]]:
        raise NotImplementedError
