"""
Host-specific configuration file selection.

A node reads `{hostname}-settings.env` when present so that several nodes can
share one checkout with different watched paths and thresholds. Otherwise the
shared `settings.env` is used.
"""

import logging
import socket
from pathlib import Path

BASE_SETTINGS_FILE = "settings.env"


def get_hostname() -> str:
    """Get the current hostname (without domain)."""
    return socket.gethostname().split('.')[0]


def get_hostname_settings_file(base_dir: Path = Path(".")) -> str:
    """
    Get the settings file for this host.

    Returns the host-specific file if it exists, else the base settings file
    (which may itself be missing; pydantic-settings then uses env and defaults).
    """
    host_settings = base_dir / f"{get_hostname()}-settings.env"
    if host_settings.exists():
        logging.debug(f"Using host-specific configuration: {host_settings}")
        return str(host_settings)

    return str(base_dir / BASE_SETTINGS_FILE)


def list_all_settings_files(base_dir: Path = Path(".")) -> list[str]:
    """List all available settings files (base + host-specific)."""
    settings_files = []

    if (base_dir / BASE_SETTINGS_FILE).exists():
        settings_files.append(str(base_dir / BASE_SETTINGS_FILE))

    for file_path in sorted(base_dir.glob("*-settings.env")):
        settings_files.append(str(file_path))

    return settings_files
