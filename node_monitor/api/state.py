from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..dependencies import get_config_watcher, get_local_monitor
from ..models import AlertState, LocalState, ThresholdConfig
from ..services.config_watcher import ConfigWatcher
from ..services.local_monitor import LocalMonitor

router = APIRouter(prefix="/api/node", tags=["node"])


@router.get("/state", response_model=LocalState)
async def get_local_state(
    local_monitor: LocalMonitor = Depends(get_local_monitor),
) -> LocalState:
    """Return the last completed local state snapshot."""
    return local_monitor.get_state_cached()


@router.get("/thresholds", response_model=ThresholdConfig)
async def get_thresholds(
    config_watcher: ConfigWatcher = Depends(get_config_watcher),
) -> ThresholdConfig:
    return config_watcher.current


@router.get("/health")
async def get_storage_health(
    local_monitor: LocalMonitor = Depends(get_local_monitor),
) -> JSONResponse:
    """
    Storage health summary.

    HTTP Status Codes:
        200: All watched disks above their free space floor
        507: Insufficient Storage (at least one disk at or below its floor)
        503: Service Unavailable (no snapshot yet, or monitoring stopped on
             an invalid disk reading)
    """
    state = local_monitor.get_state_cached()
    body = {"status": "ok", "alert": state.alert.value, "disk_count": len(state.disks)}

    fatal_error = local_monitor.fatal_error
    if fatal_error is not None:
        body.update({"status": "failed", "error": str(fatal_error)})
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)

    if not local_monitor.has_snapshot:
        body["status"] = "pending"
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)

    if state.alert == AlertState.LOW_SPACE:
        body["status"] = "low_space"
        return JSONResponse(status_code=status.HTTP_507_INSUFFICIENT_STORAGE, content=body)

    return JSONResponse(status_code=status.HTTP_200_OK, content=body)
