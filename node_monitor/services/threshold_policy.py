"""
Minimum free space floor for a disk.

Two thresholds are configured: a percentage of capacity and an absolute byte
budget. The floor is the smaller of the two, so the percentage dominates on
small disks and the byte budget dominates on large ones.
"""

from typing import Tuple

from ..models import Disk


def minimum_free_by_bytes_and_percent(
    total_bytes: int, percent_threshold: int, bytes_threshold: int
) -> Tuple[int, float]:
    """Return (minimum by bytes, minimum by percent) for a disk of `total_bytes`."""
    min_by_percent = total_bytes * percent_threshold / 100.0
    return bytes_threshold, min_by_percent


def minimum_free_floor(
    total_bytes: int, percent_threshold: int, bytes_threshold: int
) -> float:
    min_by_bytes, min_by_percent = minimum_free_by_bytes_and_percent(
        total_bytes, percent_threshold, bytes_threshold
    )
    return min(min_by_percent, min_by_bytes)


def percent_free(disk: Disk) -> float:
    return disk.free / disk.total * 100.0
