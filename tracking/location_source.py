#Purpose: The device location seam.
#Mirrors the browser geolocation primitives the tracking session needs:
#a one-shot fix and a continuous watch with success/error callbacks.
#Implementations report failures as LocationError with a classified code.

from __future__ import annotations

from typing import Any, Callable, Protocol

from .models import DevicePosition, LocationError, PositionOptions

PositionCallback = Callable[[DevicePosition], None]
ErrorCallback = Callable[[LocationError], None]


class LocationSource(Protocol):
    async def get_current_position(self, options: PositionOptions) -> DevicePosition:
        """Resolve one fix or raise LocationError."""
        ...

    def watch_position(
        self,
        on_position: PositionCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> Any:
        """Start delivering updates; returns a handle for clear_watch()."""
        ...

    def clear_watch(self, handle: Any) -> None:
        """Stop delivering updates for `handle`. Must be safe to call twice."""
        ...
