"""
Purpose: Domain models for live location tracking.
What it does:
- TrackingState = IDLE | ACQUIRING | ACTIVE | DEGRADED | FAILED
- FailureReason for FAILED sessions
- LocationErrorCode / LocationError as reported by a LocationSource
- DevicePosition (raw reading) and TrackedLocation (what the map shows)
- PositionOptions (accuracy / timeout / cache tolerance for one request)

Rule: No device calls, no map calls. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from routing.models import Coordinate


class TrackingState(str, Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    ACTIVE = "active"
    DEGRADED = "degraded"
    FAILED = "failed"


class LocationErrorCode(Enum):
    # numeric values follow the W3C GeolocationPositionError codes
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3
    UNKNOWN = 0

    @classmethod
    def from_code(cls, code) -> LocationErrorCode:
        if isinstance(code, cls):
            return code
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.UNKNOWN


class FailureReason(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"
    INSECURE_CONTEXT = "insecure_context"

    @classmethod
    def from_error_code(cls, code: LocationErrorCode) -> FailureReason:
        return {
            LocationErrorCode.PERMISSION_DENIED: cls.PERMISSION_DENIED,
            LocationErrorCode.POSITION_UNAVAILABLE: cls.POSITION_UNAVAILABLE,
            LocationErrorCode.TIMEOUT: cls.TIMEOUT,
        }.get(code, cls.UNKNOWN)


class LocationError(Exception):
    """A classified failure from the device location source."""

    def __init__(self, code, message: str = ""):
        self.code = LocationErrorCode.from_code(code)
        super().__init__(message or self.code.name.replace("_", " ").lower())


@dataclass(frozen=True)
class DevicePosition:
    latitude: float
    longitude: float
    accuracy: float  # meters


@dataclass(frozen=True)
class TrackedLocation:
    coordinate: Coordinate
    accuracy_m: float

    @classmethod
    def from_position(cls, position: DevicePosition) -> TrackedLocation:
        return cls(
            coordinate=Coordinate(latitude=position.latitude, longitude=position.longitude),
            accuracy_m=float(position.accuracy),
        )


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool
    timeout_s: float
    maximum_age_s: float
