import logging
from typing import Any, Callable

from ..models import ThresholdConfig


class ConfigWatcher:
    """
    Re-reads the free space alert thresholds and logs when they change.

    `settings_source` is called on every refresh and must return an object
    exposing `storage_space_alert_free_threshold_percent` and
    `storage_space_alert_free_threshold_bytes`.
    """

    def __init__(self, settings_source: Callable[[], Any]):
        self._settings_source = settings_source
        self._current = ThresholdConfig()

    @property
    def current(self) -> ThresholdConfig:
        return self._current

    def refresh(self) -> ThresholdConfig:
        settings = self._settings_source()
        percent_threshold = settings.storage_space_alert_free_threshold_percent
        bytes_threshold = settings.storage_space_alert_free_threshold_bytes
        last = self._current

        if last.percent_threshold != percent_threshold:
            logging.info(
                f"Updated free space percent alert threshold "
                f"{last.percent_threshold} -> {percent_threshold}",
                extra={
                    "operation": "threshold_change",
                    "setting": "storage_space_alert_free_threshold_percent",
                    "old_value": last.percent_threshold,
                    "new_value": percent_threshold,
                },
            )

        if last.bytes_threshold != bytes_threshold:
            logging.info(
                f"Updated free space bytes alert threshold "
                f"{last.bytes_threshold} -> {bytes_threshold}",
                extra={
                    "operation": "threshold_change",
                    "setting": "storage_space_alert_free_threshold_bytes",
                    "old_value": last.bytes_threshold,
                    "new_value": bytes_threshold,
                },
            )

        self._current = ThresholdConfig(
            percent_threshold=percent_threshold, bytes_threshold=bytes_threshold
        )
        return self._current
