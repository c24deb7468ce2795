"""
Utilities package for the node monitor.

Small helpers shared by the monitoring services.
"""

from .despam import DespamLimiter
from .human import format_bytes_human_readable

__all__ = [
    "DespamLimiter",
    "format_bytes_human_readable",
]
