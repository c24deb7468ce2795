import asyncio
import logging
import os
from typing import Any, Callable, Protocol

from ..core.exceptions import ProbeError
from ..models import Disk


class CapacityProbe(Protocol):
    async def probe(self, path: str) -> Disk:
        ...


def disk_from_statvfs(path: str, svfs: Any) -> Disk:
    """
    Build a Disk from a statvfs result.

    f_bsize is a historical field that can differ from the fragment size on
    some filesystems; block counts are in units of f_frsize.
    """
    return Disk(
        path=path,
        free=svfs.f_bfree * svfs.f_frsize,
        total=svfs.f_blocks * svfs.f_frsize,
    )


class StatvfsCapacityProbe:
    """Reads free/total capacity with os.statvfs in a worker thread."""

    async def probe(self, path: str) -> Disk:
        logging.debug(f"Probing capacity: {path}")

        try:
            svfs = await asyncio.to_thread(os.statvfs, path)
        except OSError as e:
            logging.debug(f"statvfs failed for {path}: {e}")
            raise ProbeError(path, e.strerror or str(e)) from e

        return disk_from_statvfs(path, svfs)


class FunctionCapacityProbe:
    """
    Probe backed by a plain callable returning a statvfs-like object.

    Used to substitute deterministic readings (or failures) per path without
    touching the filesystem.
    """

    def __init__(self, statvfs_func: Callable[[str], Any]):
        self._statvfs_func = statvfs_func

    async def probe(self, path: str) -> Disk:
        try:
            svfs = self._statvfs_func(path)
        except ProbeError:
            raise
        except OSError as e:
            raise ProbeError(path, e.strerror or str(e)) from e

        return disk_from_statvfs(path, svfs)
