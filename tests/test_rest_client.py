"""
Unit tests for the REST server proxy using a mocked requests session.
"""

import logging
from unittest.mock import Mock

import pytest
import requests

from cvat_query.domain.errors import TransportError
from cvat_query.infrastructure import config
from cvat_query.infrastructure.logging import get_logger
from cvat_query.infrastructure.rest.client import RestServerProxy


def _response(status=200, payload=None, text=""):
    r = Mock()
    r.status_code = status
    r.text = text
    if isinstance(payload, Exception):
        r.json.side_effect = payload
    else:
        r.json.return_value = payload
    return r


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def proxy(session):
    return RestServerProxy(base_url="http://cvat.local:8080/", session=session, token="secret", timeout=3)


class TestRequests:
    @pytest.mark.asyncio
    async def test_list_returns_results_and_count(self, proxy, session):
        session.get.return_value = _response(payload={"count": 31, "next": "x", "results": [{"id": 1}]})

        page = await proxy.list("tasks", {"page": 2, "search": None})

        assert page == {"results": [{"id": 1}], "count": 31}
        session.get.assert_called_once_with(
            "http://cvat.local:8080/api/tasks",
            params={"page": 2},
            headers={"Accept": "application/vnd.cvat+json", "Authorization": "Token secret"},
            timeout=3,
        )

    @pytest.mark.asyncio
    async def test_active_organization_is_sent(self, proxy, session):
        session.get.return_value = _response(payload={"count": 0, "results": []})
        config.activate_organization(3, "acme")

        await proxy.list("projects", {"id": 7})

        assert session.get.call_args.kwargs["params"] == {"id": 7, "org": "acme"}

    @pytest.mark.asyncio
    async def test_flatten_follows_next_links(self, proxy, session):
        session.get.side_effect = [
            _response(payload={"count": 3, "next": "http://cvat.local:8080/api/jobs?task_id=4&page=2",
                               "results": [{"id": 1}, {"id": 2}]}),
            _response(payload={"count": 3, "next": None, "results": [{"id": 3}]}),
        ]

        jobs = await proxy.get("jobs", {"task_id": 4}, True)

        assert [j["id"] for j in jobs] == [1, 2, 3]
        second = session.get.call_args_list[1]
        assert second.args[0] == "http://cvat.local:8080/api/jobs?task_id=4&page=2"
        assert second.kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_null_count_falls_back_to_length(self, proxy, session):
        session.get.return_value = _response(payload={"count": None, "results": [{"id": 1}, {"id": 2}]})

        page = await proxy.list("tasks", {"search": "x"})

        assert page["count"] == 2

    @pytest.mark.asyncio
    async def test_page_limit_truncates_with_warning(self, proxy, session, monkeypatch, caplog):
        monkeypatch.setenv("CVAT_MAX_PAGES", "2")
        session.get.side_effect = [
            _response(payload={"count": 3, "next": "http://cvat.local:8080/api/labels?page=2", "results": [{"id": 1}]}),
            _response(payload={"count": 3, "next": "http://cvat.local:8080/api/labels?page=3", "results": [{"id": 2}]}),
        ]

        with caplog.at_level(logging.WARNING, logger="cvat_query.rest"):
            labels = await proxy.get("labels", {"task_id": 42}, True)

        assert [lb["id"] for lb in labels] == [1, 2]
        assert session.get.call_count == 2
        assert "results truncated" in caplog.text

    @pytest.mark.asyncio
    async def test_self_and_object_paths(self, proxy, session):
        session.get.return_value = _response(payload={"id": 1, "username": "admin"})

        await proxy.get_self()
        await proxy.get_one("tasks", 42, "data/meta")

        urls = [c.args[0] for c in session.get.call_args_list]
        assert urls == ["http://cvat.local:8080/api/users/self", "http://cvat.local:8080/api/tasks/42/data/meta"]

    @pytest.mark.asyncio
    async def test_search_project_names(self, proxy, session):
        session.get.return_value = _response(payload={"count": 1, "results": [{"id": 7, "name": "city"}]})

        names = await proxy.search_project_names("ci", 5)

        assert names == [{"id": 7, "name": "city"}]
        assert session.get.call_args.kwargs["params"] == {
            "names_only": True, "page": 1, "page_size": 5, "search": "ci",
        }


class TestErrors:
    @pytest.mark.asyncio
    async def test_http_error_becomes_transport_error(self, proxy, session):
        session.get.return_value = _response(status=403, text="forbidden")

        with pytest.raises(TransportError) as exc:
            await proxy.get("labels", {"task_id": 42}, True)

        assert exc.value.resource == "labels"
        assert exc.value.status_code == 403
        assert exc.value.params == {"task_id": 42}

    @pytest.mark.asyncio
    async def test_network_error_becomes_transport_error(self, proxy, session):
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as exc:
            await proxy.list("jobs", {"id": 1})

        assert exc.value.status_code is None
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

    @pytest.mark.asyncio
    async def test_non_json_body(self, proxy, session):
        session.get.return_value = _response(payload=ValueError("no json"))

        with pytest.raises(TransportError):
            await proxy.server_about()


def test_defaults_come_from_environment(monkeypatch):
    monkeypatch.setenv("CVAT_URL", "http://example.org/")
    monkeypatch.setenv("CVAT_TOKEN", "tkn")
    monkeypatch.setenv("CVAT_HTTP_TIMEOUT", "7")

    p = RestServerProxy(session=Mock())

    assert p.base_url == "http://example.org"
    assert p.token == "tkn"
    assert p.timeout == 7.0


@pytest.mark.parametrize("value, expected", [("5", 5), ("0", 100), ("many", 100)])
def test_max_pages(monkeypatch, value, expected):
    monkeypatch.setenv("CVAT_MAX_PAGES", value)
    assert config.max_pages() == expected


def test_loggers_live_under_the_package_logger():
    assert get_logger("cvat_query.rest").name == "cvat_query.rest"
    assert get_logger("tools").name == "cvat_query.tools"
    assert logging.getLogger("cvat_query").handlers
