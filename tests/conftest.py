"""Pytest configuration and fixtures for synaptik-mcp tests."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from synaptik_mcp.service import TaskService
from synaptik_mcp.store import TaskStore

# Wednesday
FIXED_NOW = datetime(2025, 1, 15, 10, 30)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def clock():
    return FrozenClock(FIXED_NOW)


@pytest.fixture
def store(tmp_path):
    """A task store backed by a file in a temporary directory."""
    return TaskStore(tmp_path / "tasks.json")


@pytest.fixture
def service(store, clock):
    return TaskService(store, clock=clock)


@pytest.fixture
def tool_service(service):
    """Route every MCP tool to the temporary service."""
    with (
        patch("synaptik_mcp.tools.core.get_service", return_value=service),
        patch("synaptik_mcp.tools.views.get_service", return_value=service),
    ):
        yield service
