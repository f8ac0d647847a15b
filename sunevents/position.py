"""Geographic positions used by the solar computations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta, timezone

__all__ = ["GlobalPosition"]

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class GlobalPosition:
    """A point on the globe.

    Coordinates are not range checked; out of range values flow through the
    solar algorithm unchanged.
    """

    latitude: float
    longitude: float
    _lng_hour: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lng_hour", self.longitude / 15.0)

    @classmethod
    def at(cls, lat: float, lng: float) -> "GlobalPosition":
        """Create a position at the given latitude and longitude in degrees."""

        return cls(latitude=lat, longitude=lng)

    @property
    def lat(self) -> float:
        return self.latitude

    @property
    def lng(self) -> float:
        return self.longitude

    @property
    def lng_hour(self) -> float:
        """Longitude expressed as an offset from Greenwich in hours."""

        return self._lng_hour

    def lng_timezone(self) -> timezone:
        """Return a fixed offset timezone derived from the longitude."""

        seconds = int(abs(self._lng_hour) * SECONDS_PER_HOUR)
        if self.longitude < 0:
            seconds = -seconds
        return timezone(timedelta(seconds=seconds))
