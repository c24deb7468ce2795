import asyncio
import logging
from typing import Optional

from ...core.exceptions import InvariantViolation, ProbeError
from .local_monitor import LocalMonitor


class RefreshLoop:
    """Drives LocalMonitor.update_state() at a fixed cadence."""

    def __init__(self, monitor: LocalMonitor, interval_seconds: float):
        self._monitor = monitor
        self._interval_seconds = interval_seconds

        self._is_running = False
        self._loop_task: Optional[asyncio.Task] = None
        self._fatal_error: Optional[InvariantViolation] = None

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def fatal_error(self) -> Optional[InvariantViolation]:
        return self._fatal_error

    async def start(self) -> None:
        if self._fatal_error is not None:
            # A loop that died on an invalid disk reading is never restarted
            raise self._fatal_error

        if self._loop_task is not None and not self._loop_task.done():
            logging.warning("Local monitor refresh loop already running")
            return

        self._is_running = True
        self._loop_task = asyncio.create_task(self._refresh_loop())
        logging.info("Local monitor refresh loop started")

    async def stop(self) -> None:
        """Cancel the loop. A fatal error stays available via `fatal_error`."""
        self._is_running = False

        task, self._loop_task = self._loop_task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except InvariantViolation:
            # Already logged and recorded when the loop died
            pass

        logging.info("Local monitor refresh loop stopped")

    async def wait(self) -> None:
        """Wait for the loop to finish, propagating a fatal error."""
        if self._loop_task is not None:
            await self._loop_task

    async def _refresh_loop(self) -> None:
        logging.info(
            f"Local monitor refreshing every {self._interval_seconds}s"
        )
        try:
            while self._is_running:
                try:
                    await self._monitor.update_state()
                except ProbeError as e:
                    # Previous snapshot stays cached; retry on the next tick
                    logging.warning(f"Local state refresh failed, keeping last snapshot: {e}")
                except InvariantViolation as e:
                    logging.critical(f"Local monitor stopped on invalid disk reading: {e}")
                    self._fatal_error = e
                    self._is_running = False
                    raise
                except Exception as e:
                    logging.error(f"Error in local monitor refresh loop: {e}")

                await asyncio.sleep(self._interval_seconds)

        except asyncio.CancelledError:
            logging.debug("Local monitor refresh loop cancelled")
            raise
