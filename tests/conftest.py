"""
Pytest configuration and fixtures for cvat_query tests.

Provides an in-memory server proxy that records every remote call.
"""

import pytest

from cvat_query.api import CVATQueryAPI
from cvat_query.infrastructure import config
from tests.fakes import SAMPLE_DATA, FakeServerProxy


@pytest.fixture
def fake_proxy():
    """Fake proxy pre-loaded with a small project/task/job/label graph."""
    return FakeServerProxy(data={k: [dict(r) for r in v] for k, v in SAMPLE_DATA.items()})


@pytest.fixture
def api(fake_proxy):
    return CVATQueryAPI(fake_proxy)


@pytest.fixture(autouse=True)
def reset_organization():
    """Every test starts and ends without an active organization."""
    config.deactivate_organization()
    yield
    config.deactivate_organization()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
