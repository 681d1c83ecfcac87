"""Location providers for the deferred GPS path."""

from __future__ import annotations


class FixedLocationProvider:
    """Returns a preset fix; `None` simulates an unavailable location."""

    def __init__(self, location: tuple[float, float] | None = None) -> None:
        self._location = location
        self.calls = 0

    async def get_location(self) -> tuple[float, float] | None:
        self.calls += 1
        return self._location
