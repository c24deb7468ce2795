import logging
from datetime import timedelta
from typing import Iterable, Optional

from ..core.exceptions import InvariantViolation
from ..models import AlertState, Disk, ThresholdConfig
from ..utils.despam import DespamLimiter
from ..utils.human import format_bytes_human_readable
from .threshold_policy import (
    minimum_free_by_bytes_and_percent,
    minimum_free_floor,
    percent_free,
)

# Downstream alerting matches on this prefix; do not change it.
STABLE_ALERT_STRING = "storage space alert"

DEFAULT_DESPAM_INTERVAL = timedelta(hours=1)


class AlertEvaluator:
    def __init__(self, despam: Optional[DespamLimiter] = None):
        self._despam = despam or DespamLimiter(DEFAULT_DESPAM_INTERVAL)

    @property
    def despam(self) -> DespamLimiter:
        return self._despam

    def evaluate(
        self, disks: Iterable[Disk], thresholds: ThresholdConfig
    ) -> AlertState:
        alert = AlertState.OK

        for disk in disks:
            if disk.total == 0:
                raise InvariantViolation(
                    f"Total disk space cannot be zero (path: {disk.path})"
                )

            min_space = minimum_free_floor(
                disk.total,
                thresholds.percent_threshold,
                thresholds.bytes_threshold,
            )
            is_low = disk.free <= min_space

            min_by_bytes, min_by_percent = minimum_free_by_bytes_and_percent(
                disk.total,
                thresholds.percent_threshold,
                thresholds.bytes_threshold,
            )
            logging.debug(
                f"min by % {min_by_percent}, min bytes {min_by_bytes}, "
                f"disk.free {disk.free} -> alert {is_low}"
            )

            # Keep going after the first low disk so every low disk is reported
            if is_low:
                alert = AlertState.LOW_SPACE
                self.maybe_log_space_error(disk, min_space)

        return alert

    def maybe_log_space_error(self, disk: Disk, min_space: float) -> bool:
        message = (
            f"{STABLE_ALERT_STRING}: free space at {percent_free(disk):.3f}% on "
            f"{disk.path}: {format_bytes_human_readable(disk.total)} total, "
            f"{format_bytes_human_readable(disk.free)} free, "
            f"min. free {format_bytes_human_readable(min_space)}. "
            f"Please adjust retention policies as needed to avoid running out "
            f"of space."
        )

        return self._despam.log(
            f"{STABLE_ALERT_STRING}:{disk.path}",
            logging.ERROR,
            message,
            extra={
                "operation": "storage_space_alert",
                "alert_tag": STABLE_ALERT_STRING,
                "path": disk.path,
                "total_bytes": disk.total,
                "free_bytes": disk.free,
                "min_free_bytes": int(min_space),
            },
        )
