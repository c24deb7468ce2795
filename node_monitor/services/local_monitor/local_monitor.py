import asyncio
import logging
import time
from datetime import timedelta
from typing import Callable, List, Optional, Sequence

from ...config import Settings
from ...core.exceptions import InvariantViolation
from ...models import Disk, LocalState
from ..alert_evaluator import AlertEvaluator
from ..capacity_probe import CapacityProbe
from ..config_watcher import ConfigWatcher

_PROCESS_START = time.monotonic()


def _default_version() -> str:
    from ... import __version__

    return __version__


def _default_uptime() -> timedelta:
    return timedelta(seconds=time.monotonic() - _PROCESS_START)


class LocalMonitor:
    """
    Owns the cached LocalState snapshot for this node.

    update_state() runs one refresh cycle: thresholds are refreshed first so
    that a changed threshold applies to the same cycle's evaluation, then
    every watched path is probed, evaluated and the new snapshot swapped in.
    """

    def __init__(
        self,
        settings: Settings,
        probe: CapacityProbe,
        config_watcher: Optional[ConfigWatcher] = None,
        evaluator: Optional[AlertEvaluator] = None,
        watched_paths: Optional[Sequence[str]] = None,
        version_provider: Optional[Callable[[], str]] = None,
        uptime_provider: Optional[Callable[[], timedelta]] = None,
    ):
        self._settings = settings
        self._probe = probe
        self._config_watcher = config_watcher or ConfigWatcher(lambda: settings)
        self._evaluator = evaluator or AlertEvaluator()
        self._watched_paths = list(watched_paths) if watched_paths else None
        self._version_provider = version_provider or _default_version
        self._uptime_provider = uptime_provider or _default_uptime

        self._update_lock = asyncio.Lock()
        self._state = LocalState.initial(version=self._version_provider())
        self._has_snapshot = False
        self._fatal_error: Optional[InvariantViolation] = None

        logging.debug(f"LocalMonitor initialized for paths: {self.watched_paths}")

    @property
    def watched_paths(self) -> List[str]:
        if self._watched_paths is not None:
            return list(self._watched_paths)
        return self._settings.watched_paths

    @property
    def config_watcher(self) -> ConfigWatcher:
        return self._config_watcher

    @property
    def has_snapshot(self) -> bool:
        """False until the first refresh cycle has completed."""
        return self._has_snapshot

    @property
    def fatal_error(self) -> Optional[InvariantViolation]:
        return self._fatal_error

    async def update_state(self) -> None:
        # A second caller waits for the running cycle instead of overlapping it
        async with self._update_lock:
            if self._fatal_error is not None:
                raise self._fatal_error

            thresholds = self._config_watcher.refresh()

            disks = await self._get_disks()
            try:
                alert = self._evaluator.evaluate(disks, thresholds)
            except InvariantViolation as e:
                # No further cycles run once a probe has produced an impossible reading
                self._fatal_error = e
                raise

            new_state = LocalState(
                version=self._version_provider(),
                uptime=self._uptime_provider(),
                disks=disks,
                alert=alert,
            )
            self._state = new_state
            self._has_snapshot = True

            logging.debug(
                f"Local state updated: {len(disks)} disk(s), alert {alert.value}"
            )

    def get_state_cached(self) -> LocalState:
        return self._state

    async def _get_disks(self) -> List[Disk]:
        disks = []
        for path in self.watched_paths:
            disks.append(await self._probe.probe(path))
        return disks
