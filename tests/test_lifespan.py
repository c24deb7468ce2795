"""
Tests for the application lifespan: logging setup, refresh loop start/stop and
the health endpoint while the loop runs.

The monitor and refresh loop are injected as singletons so no real storage is
probed.
"""

import logging
import time

import pytest
from fastapi.testclient import TestClient

from node_monitor import dependencies
from node_monitor.main import app
from node_monitor.services.capacity_probe import FunctionCapacityProbe
from node_monitor.services.config_watcher import ConfigWatcher
from node_monitor.services.local_monitor import LocalMonitor, RefreshLoop
from tests.factories import FakeSettings, GiB, StatvfsTable, make_statvfs


@pytest.fixture
def app_env(monkeypatch, tmp_path):
    """Run the app from a temp dir with logging redirected, restoring root handlers."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "logs" / "node.log"))
    monkeypatch.setenv("DATA_DIRECTORY", str(tmp_path))

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield tmp_path
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def _install_monitor(table: StatvfsTable, settings: FakeSettings):
    monitor = LocalMonitor(
        settings=settings,
        probe=FunctionCapacityProbe(table),
        config_watcher=ConfigWatcher(lambda: settings),
        version_provider=lambda: "1.2.3",
    )
    refresh_loop = RefreshLoop(monitor, interval_seconds=0.01)
    dependencies._singletons["local_monitor"] = monitor
    dependencies._singletons["refresh_loop"] = refresh_loop
    return monitor, refresh_loop


def _wait_for_health(client: TestClient, status_code: int, timeout: float = 2.0):
    deadline = time.monotonic() + timeout
    response = client.get("/api/node/health")
    while response.status_code != status_code and time.monotonic() < deadline:
        time.sleep(0.01)
        response = client.get("/api/node/health")
    return response


class TestLifespan:
    def test_loop_runs_and_stops_with_app(self, app_env):
        table = StatvfsTable({"/data": make_statvfs(900 * GiB, 1000 * GiB)})
        monitor, refresh_loop = _install_monitor(table, FakeSettings(percent=10, bytes_threshold=GiB))

        with TestClient(app) as client:
            response = _wait_for_health(client, 200)

            assert response.status_code == 200
            assert response.json() == {"status": "ok", "alert": "ok", "disk_count": 1}
            assert refresh_loop.is_running is True

        assert refresh_loop.is_running is False
        assert monitor.has_snapshot is True
        assert (app_env / "logs" / "node.log").exists()

    def test_low_space_reported_while_running(self, app_env):
        table = StatvfsTable({"/data": make_statvfs(50 * GiB, 1000 * GiB)})
        _install_monitor(table, FakeSettings(percent=10, bytes_threshold=100 * GiB))

        with TestClient(app) as client:
            response = _wait_for_health(client, 507)

            assert response.status_code == 507
            assert response.json()["alert"] == "low_space"

    def test_zero_capacity_reading_makes_health_fail(self, app_env):
        table = StatvfsTable({"/data": make_statvfs(0, 0)})
        monitor, refresh_loop = _install_monitor(table, FakeSettings(percent=10, bytes_threshold=GiB))

        with TestClient(app) as client:
            # The loop must have died on the reading, not still be pending
            deadline = time.monotonic() + 2.0
            while refresh_loop.is_running and time.monotonic() < deadline:
                time.sleep(0.01)
            response = client.get("/api/node/health")

            assert response.status_code == 503
            assert response.json()["status"] == "failed"
            assert "cannot be zero" in response.json()["error"]

            # Stays failed; no later cycle can bring it back to ok
            time.sleep(0.05)
            assert client.get("/api/node/health").status_code == 503

        assert refresh_loop.fatal_error is not None
        assert monitor.fatal_error is refresh_loop.fatal_error
        assert table.calls == ["/data"]
