"""Local storage capacity monitor for a single node."""

__version__ = "0.1.0"
