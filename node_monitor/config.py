from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from .utils.host_config import get_hostname_settings_file


class Settings(BaseSettings):
    # Watched storage
    data_directory: str = "."
    additional_watched_paths: List[str] = []  # JSON list in env, e.g. '["/mnt/wal"]'

    # Free space alert thresholds (re-read every refresh cycle)
    storage_space_alert_free_threshold_percent: int = Field(default=5, ge=0, le=100)
    storage_space_alert_free_threshold_bytes: int = Field(default=0, ge=0)

    # Minimum seconds between repeated low space errors for the same disk
    storage_space_alert_despam_interval_seconds: int = Field(default=3600, gt=0)

    # Refresh cadence
    health_monitor_tick_interval_seconds: int = Field(default=10, gt=0)

    # Logging configuration
    log_level: str = "INFO"
    log_file_path: str = "logs/node_monitor.log"
    log_retention_days: int = 30

    # HTTP read API
    host: str = "0.0.0.0"
    port: int = 8033

    model_config = SettingsConfigDict(env_file=get_hostname_settings_file())

    @property
    def log_directory(self) -> Path:
        """Return log directory as a Path object"""
        return Path(self.log_file_path).parent

    @property
    def watched_paths(self) -> List[str]:
        """Data directory first, then additional paths, without duplicates."""
        paths: List[str] = []
        for path in [self.data_directory, *self.additional_watched_paths]:
            if path and path not in paths:
                paths.append(path)
        return paths

    @property
    def config_file_info(self) -> dict:
        """Return information about which configuration file is being used."""
        from .utils.host_config import get_hostname, list_all_settings_files

        return {
            "hostname": get_hostname(),
            "active_config_file": get_hostname_settings_file(),
            "all_available_configs": list_all_settings_files()
        }
