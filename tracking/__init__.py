"""
Tracking domain package.

Public API:
- TrackingSession, TrackingStateError
- Models: TrackingState, FailureReason, LocationError, LocationErrorCode,
  DevicePosition, TrackedLocation, PositionOptions
- LocationSource (device seam), TrackingPolicy
"""
from .location_source import LocationSource
from .models import (
    DevicePosition,
    FailureReason,
    LocationError,
    LocationErrorCode,
    PositionOptions,
    TrackedLocation,
    TrackingState,
)
from .policy import TrackingPolicy, default_tracking_policy
from .state_machine import TrackingSession, TrackingStateError

__all__ = [
    "LocationSource",
    "DevicePosition",
    "FailureReason",
    "LocationError",
    "LocationErrorCode",
    "PositionOptions",
    "TrackedLocation",
    "TrackingState",
    "TrackingPolicy",
    "default_tracking_policy",
    "TrackingSession",
    "TrackingStateError",
]
