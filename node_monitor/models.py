from datetime import timedelta
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, ConfigDict


class AlertState(str, Enum):
    """Aggregate storage space alert for all watched disks"""

    OK = "ok"  # All disks above their floor
    LOW_SPACE = "low_space"  # At least one disk at or below its floor


class Disk(BaseModel):
    """
    Capacity reading for a single watched path.

    total == 0 is never a valid reading, but it is checked by the evaluator
    rather than here so that a broken probe result surfaces as a fatal error.
    """

    path: str = Field(..., description="Watched storage path")

    free: int = Field(..., ge=0, description="Free space in bytes")

    total: int = Field(..., ge=0, description="Total capacity in bytes")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "path": "/var/lib/node/data",
                "free": 53687091200,
                "total": 1073741824000,
            }
        },
    )


class ThresholdConfig(BaseModel):
    """Free space alert thresholds as last read from configuration"""

    percent_threshold: int = Field(
        default=0, ge=0, le=100, description="Minimum free space in percent of capacity"
    )

    bytes_threshold: int = Field(
        default=0, ge=0, description="Minimum free space in bytes"
    )

    model_config = ConfigDict(frozen=True)


class LocalState(BaseModel):
    """
    Snapshot of local node health produced by one refresh cycle.

    Snapshots are immutable and replaced wholesale, so a reader holding one
    never observes a partially updated state.
    """

    version: str = Field(..., description="Process version identifier")

    uptime: timedelta = Field(..., description="Process uptime at snapshot time")

    disks: List[Disk] = Field(default_factory=list, description="Watched disks in order")

    alert: AlertState = Field(
        default=AlertState.OK, description="Aggregate storage space alert"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "version": "0.1.0",
                "uptime": "PT3600S",
                "disks": [
                    {
                        "path": "/var/lib/node/data",
                        "free": 53687091200,
                        "total": 1073741824000,
                    }
                ],
                "alert": "low_space",
            }
        },
    )

    @classmethod
    def initial(cls, version: str = "") -> "LocalState":
        """Placeholder snapshot cached before the first refresh completes."""
        return cls(version=version, uptime=timedelta(0), disks=[], alert=AlertState.OK)
