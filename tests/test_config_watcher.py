"""
Tests for ConfigWatcher threshold change detection.
"""

import logging

from node_monitor.models import ThresholdConfig
from node_monitor.services.config_watcher import ConfigWatcher
from tests.factories import FakeSettings, GiB, MiB


def _threshold_logs(caplog):
    return [r.message for r in caplog.records if r.message.startswith("Updated free space")]


class TestConfigWatcher:
    def test_initial_cache_is_zero(self):
        watcher = ConfigWatcher(lambda: FakeSettings())
        assert watcher.current == ThresholdConfig(percent_threshold=0, bytes_threshold=0)

    def test_refresh_returns_configured_values(self):
        watcher = ConfigWatcher(lambda: FakeSettings(percent=10, bytes_threshold=GiB))

        thresholds = watcher.refresh()

        assert thresholds == ThresholdConfig(percent_threshold=10, bytes_threshold=GiB)
        assert watcher.current == thresholds

    def test_first_refresh_logs_both_transitions(self, caplog):
        caplog.set_level(logging.INFO)
        watcher = ConfigWatcher(lambda: FakeSettings(percent=10, bytes_threshold=GiB))

        watcher.refresh()

        assert _threshold_logs(caplog) == [
            "Updated free space percent alert threshold 0 -> 10",
            f"Updated free space bytes alert threshold 0 -> {GiB}",
        ]

    def test_unchanged_values_are_not_logged(self, caplog):
        caplog.set_level(logging.INFO)
        watcher = ConfigWatcher(lambda: FakeSettings(percent=10, bytes_threshold=GiB))
        watcher.refresh()
        caplog.clear()

        for _ in range(5):
            watcher.refresh()

        assert _threshold_logs(caplog) == []

    def test_change_logged_exactly_once(self, caplog):
        caplog.set_level(logging.INFO)
        settings = FakeSettings(percent=10, bytes_threshold=GiB)
        watcher = ConfigWatcher(lambda: settings)
        watcher.refresh()
        caplog.clear()

        settings.storage_space_alert_free_threshold_percent = 5
        settings.storage_space_alert_free_threshold_bytes = 500 * MiB
        watcher.refresh()
        watcher.refresh()

        assert _threshold_logs(caplog) == [
            "Updated free space percent alert threshold 10 -> 5",
            f"Updated free space bytes alert threshold {GiB} -> {500 * MiB}",
        ]
        assert watcher.current == ThresholdConfig(percent_threshold=5, bytes_threshold=500 * MiB)

    def test_only_changed_setting_is_logged(self, caplog):
        caplog.set_level(logging.INFO)
        settings = FakeSettings(percent=10, bytes_threshold=GiB)
        watcher = ConfigWatcher(lambda: settings)
        watcher.refresh()
        caplog.clear()

        settings.storage_space_alert_free_threshold_bytes = 2 * GiB
        watcher.refresh()

        assert _threshold_logs(caplog) == [
            f"Updated free space bytes alert threshold {GiB} -> {2 * GiB}",
        ]

    def test_source_is_read_every_refresh(self):
        reads = []

        def source():
            reads.append(1)
            return FakeSettings(percent=3)

        watcher = ConfigWatcher(source)
        watcher.refresh()
        watcher.refresh()

        assert len(reads) == 2
