"""
Local Monitor Module

Components:
- LocalMonitor: Runs one refresh cycle and owns the cached LocalState snapshot
- RefreshLoop: Triggers refresh cycles at a fixed cadence
"""

from .local_monitor import LocalMonitor
from .refresh_loop import RefreshLoop

__all__ = ['LocalMonitor', 'RefreshLoop']
