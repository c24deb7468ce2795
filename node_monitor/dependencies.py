from datetime import timedelta
from functools import lru_cache
from typing import Any, Dict

from .config import Settings
from .services.alert_evaluator import AlertEvaluator
from .services.capacity_probe import StatvfsCapacityProbe
from .services.config_watcher import ConfigWatcher
from .services.local_monitor import LocalMonitor, RefreshLoop
from .utils.despam import DespamLimiter

# Global singleton instances
_singletons: Dict[str, Any] = {}


@lru_cache
def get_settings() -> Settings:
    """Settings singleton, read once at startup."""
    return Settings()


def get_live_settings() -> Settings:
    """Fresh Settings on every call, so edited env/settings files take effect."""
    return Settings()


def get_capacity_probe() -> StatvfsCapacityProbe:
    if "capacity_probe" not in _singletons:
        _singletons["capacity_probe"] = StatvfsCapacityProbe()
    return _singletons["capacity_probe"]


def get_config_watcher() -> ConfigWatcher:
    if "config_watcher" not in _singletons:
        _singletons["config_watcher"] = ConfigWatcher(get_live_settings)
    return _singletons["config_watcher"]


def get_alert_evaluator() -> AlertEvaluator:
    if "alert_evaluator" not in _singletons:
        settings = get_settings()
        despam = DespamLimiter(
            timedelta(seconds=settings.storage_space_alert_despam_interval_seconds)
        )
        _singletons["alert_evaluator"] = AlertEvaluator(despam=despam)
    return _singletons["alert_evaluator"]


def get_local_monitor() -> LocalMonitor:
    if "local_monitor" not in _singletons:
        _singletons["local_monitor"] = LocalMonitor(
            settings=get_settings(),
            probe=get_capacity_probe(),
            config_watcher=get_config_watcher(),
            evaluator=get_alert_evaluator(),
        )
    return _singletons["local_monitor"]


def get_refresh_loop() -> RefreshLoop:
    if "refresh_loop" not in _singletons:
        _singletons["refresh_loop"] = RefreshLoop(
            get_local_monitor(),
            interval_seconds=get_settings().health_monitor_tick_interval_seconds,
        )
    return _singletons["refresh_loop"]


def reset_singletons() -> None:
    """Drop all cached instances (used by tests)."""
    _singletons.clear()
    get_settings.cache_clear()
