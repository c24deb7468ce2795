# node_monitor/core/exceptions.py

class NodeMonitorError(Exception):
    """Base class for node monitor errors."""


class ProbeError(NodeMonitorError):
    """Raised when filesystem statistics for a watched path cannot be read."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read filesystem stats for {path}: {reason}")


class InvariantViolation(NodeMonitorError):
    """Raised when a probe returns a reading that can never be valid."""
