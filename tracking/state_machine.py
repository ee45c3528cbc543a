"""
Purpose: Live location tracking session (state machine + watch lifecycle).
What it does:

IDLE -> ACQUIRING -> ACTIVE           start(): one-shot fix, then continuous watch
ACTIVE -> DEGRADED -> ACTIVE          watch timeout / next good fix
any -> FAILED(reason)                 permission denied, unavailable, unknown, insecure context
non-IDLE -> IDLE                      stop(): clear watch, remove user marker

A one-shot timeout is retried exactly once with relaxed options before it
is surfaced. At most one watch handle is outstanding; callbacks arriving
for a watch that was already cleared are dropped.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Optional

from mapping.synchronizer import MapSynchronizer

from .location_source import LocationSource
from .models import (
    DevicePosition,
    FailureReason,
    LocationError,
    LocationErrorCode,
    TrackedLocation,
    TrackingState,
)
from .policy import TrackingPolicy, default_tracking_policy

logger = logging.getLogger(__name__)

# (level, message) -> None; level is "info" | "warning" | "error"
Notifier = Callable[[str, str], None]

FAILURE_MESSAGES = {
    FailureReason.PERMISSION_DENIED: "Location access was denied. Allow location access in your browser settings and try again.",
    FailureReason.POSITION_UNAVAILABLE: "Your location is currently unavailable. Check that location services are turned on.",
    FailureReason.TIMEOUT: "Getting your location timed out. Move to an open area and try again.",
    FailureReason.UNKNOWN: "Could not get your location. Please try again.",
    FailureReason.INSECURE_CONTEXT: "Location tracking needs a secure (HTTPS) connection.",
}


class TrackingStateError(Exception):
    """Raised when an invalid tracking transition is attempted."""
    pass


def _log_notifier(level: str, message: str) -> None:
    logger.log(logging.getLevelName(level.upper()), message)


class TrackingSession:
    """
    Owns the tracking state, the last TrackedLocation and the single watch handle.
    """
    def __init__(
        self,
        location_source: LocationSource,
        map_sync: MapSynchronizer,
        policy: Optional[TrackingPolicy] = None,
        *,
        secure_context: bool = True,
        hostname: str = "localhost",
        notify: Optional[Notifier] = None,
    ):
        self.location_source = location_source
        self.map_sync = map_sync
        self.policy = policy or default_tracking_policy()
        self.secure_context = secure_context
        self.hostname = hostname
        self.notify = notify or _log_notifier

        self.state = TrackingState.IDLE
        self.failure_reason: Optional[FailureReason] = None
        self.location: Optional[TrackedLocation] = None
        self._watch_handle: Any = None
        # bumped on every start/stop/failure; stale callbacks compare against it
        self._generation = 0

    @property
    def is_tracking(self) -> bool:
        return self.state in (TrackingState.ACTIVE, TrackingState.DEGRADED)

    @property
    def has_watch(self) -> bool:
        return self._watch_handle is not None

    #----------------
    # transitions
    #----------------
    async def start(self) -> TrackingState:
        if self.state != TrackingState.IDLE:
            raise TrackingStateError(f"Cannot start tracking from {self.state.value}")

        if not (self.secure_context or self.hostname in self.policy.trusted_local_hosts):
            self._fail(FailureReason.INSECURE_CONTEXT)
            return self.state

        self._generation += 1
        generation = self._generation
        self._transition(TrackingState.ACQUIRING)
        self.notify("info", "Getting your location...")

        try:
            position = await self._acquire_fix(generation)
        except LocationError as error:
            if generation == self._generation:
                self._fail(FailureReason.from_error_code(error.code), detail=str(error))
            return self.state

        # stop() ran while we were waiting for the fix
        if generation != self._generation:
            return self.state

        self._apply_position(position)
        self._transition(TrackingState.ACTIVE)
        self.notify("info", "Live tracking is on.")

        self._watch_handle = self.location_source.watch_position(
            partial(self._on_watch_position, generation),
            partial(self._on_watch_error, generation),
            self.policy.watch,
        )
        return self.state

    def stop(self) -> TrackingState:
        if self.state == TrackingState.IDLE:
            raise TrackingStateError("Tracking is not running")

        self._generation += 1
        self._clear_watch()
        self.map_sync.remove_user_marker()
        self.location = None
        self.failure_reason = None
        self._transition(TrackingState.IDLE)
        return self.state

    def teardown(self) -> None:
        """Stop if anything is running; safe to call in any state."""
        if self.state != TrackingState.IDLE:
            self.stop()

    #----------------
    # one-shot fix
    #----------------
    async def _acquire_fix(self, generation: int) -> DevicePosition:
        try:
            return await self.location_source.get_current_position(self.policy.initial_fix)
        except LocationError as error:
            # no retry once stop() has ended this session
            if error.code is not LocationErrorCode.TIMEOUT or generation != self._generation:
                raise
            logger.info("Initial location fix timed out; retrying with relaxed options")
        return await self.location_source.get_current_position(self.policy.retry_fix)

    #----------------
    # watch callbacks
    #----------------
    def _on_watch_position(self, generation: int, position: DevicePosition) -> None:
        if generation != self._generation or self._watch_handle is None:
            return

        self._apply_position(position)
        if self.state == TrackingState.DEGRADED:
            self._transition(TrackingState.ACTIVE)
            self.notify("info", "GPS signal regained.")

    def _on_watch_error(self, generation: int, error: LocationError) -> None:
        if generation != self._generation or self._watch_handle is None:
            return

        if error.code is LocationErrorCode.TIMEOUT:
            if self.state == TrackingState.ACTIVE:
                self._transition(TrackingState.DEGRADED)
                self.notify("warning", "GPS signal is weak. Still tracking your location.")
            return

        self._fail(FailureReason.from_error_code(error.code), detail=str(error))

    #----------------
    # helpers
    #----------------
    def _apply_position(self, position: DevicePosition) -> None:
        self.location = TrackedLocation.from_position(position)
        self.map_sync.upsert_user_marker(self.location)
        self.map_sync.center_on(self.location.coordinate, self.policy.follow_zoom)

    def _fail(self, reason: FailureReason, detail: str = "") -> None:
        self._generation += 1
        self._clear_watch()
        self.map_sync.remove_user_marker()
        self.location = None
        self.failure_reason = reason
        self._transition(TrackingState.FAILED)
        if detail:
            logger.warning("Tracking failed (%s): %s", reason.value, detail)
        self.notify("error", FAILURE_MESSAGES[reason])

    def _clear_watch(self) -> None:
        handle, self._watch_handle = self._watch_handle, None
        if handle is not None:
            self.location_source.clear_watch(handle)

    def _transition(self, new_state: TrackingState) -> None:
        logger.debug("Tracking %s -> %s", self.state.value, new_state.value)
        self.state = new_state
