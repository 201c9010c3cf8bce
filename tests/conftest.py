"""
Pytest configuration and shared fixtures.
"""
import asyncio
import os
import tempfile

# Settings are read when uptime_monitor is imported; point them at throwaway values first.
os.environ["DATA_PATH"] = tempfile.mkdtemp(prefix="uptime-monitor-tests-")
os.environ["READ_KEY"] = "read-key"
os.environ["ADMIN_KEY"] = "admin-key"
os.environ.pop("DATABASE_URL", None)

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from uptime_monitor.database import build_engine, build_session_factory, init_db, close_db  # noqa: E402
from uptime_monitor.services import MonitorChecker, MonitorStore, Prober  # noqa: E402

READ_KEY = "read-key"
ADMIN_KEY = "admin-key"


def make_transport(status_code: int = 200, exc: type = None, routes: dict = None) -> httpx.MockTransport:
    """Fake probe target.

    ``routes`` maps a host to a status code; other hosts get ``status_code``.
    ``exc`` is an httpx exception class raised for every request instead.
    """
    routes = routes or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if exc is not None:
            raise exc("simulated failure", request=request)
        return httpx.Response(routes.get(request.url.host, status_code), text="ok")

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Async engine on a fresh SQLite file with tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'monitors.db'}")
    await init_db(engine)
    yield engine
    await close_db(engine)


@pytest.fixture
def store(engine):
    return MonitorStore(build_session_factory(engine))


@pytest_asyncio.fixture
async def checker(store):
    """Checker whose probes all answer HTTP 200."""
    checker = MonitorChecker(store, Prober(transport=make_transport(200)))
    yield checker
    await asyncio.gather(*checker.in_flight, return_exceptions=True)


@pytest.fixture
def sample_monitor_data():
    """Sample data for creating monitors."""
    return {
        "name": "Example",
        "type": "http",
        "url": "https://example.com/health",
    }
