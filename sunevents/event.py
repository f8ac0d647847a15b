"""Types describing which sunrise or sunset event is wanted."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import ClassVar, Dict, List

__all__ = ["Zenith", "Event", "SunEvent"]


class Zenith(str, Enum):
    """Angle between the sun and the zenith at which an event is measured.

    See https://www.timeanddate.com/astronomy/different-types-twilight.html
    Members order by increasing angle.
    """

    golden = "golden"
    official = "official"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"

    @property
    def angle(self) -> float:
        return ZENITH_ANGLES[self]

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Zenith):
            return NotImplemented
        return self.angle < other.angle

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Zenith):
            return NotImplemented
        return self.angle <= other.angle

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Zenith):
            return NotImplemented
        return self.angle > other.angle

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Zenith):
            return NotImplemented
        return self.angle >= other.angle


ZENITH_ANGLES: Dict[Zenith, float] = {
    Zenith.golden: 80.0,
    Zenith.official: 90.0,
    Zenith.civil: 96.0,
    Zenith.nautical: 102.0,
    Zenith.astronomical: 108.0,
}


class Event(str, Enum):
    """Either the sunrise or the sunset. Sunrise orders first."""

    sunrise = "sunrise"
    sunset = "sunset"

    @property
    def hour(self) -> float:
        """Approximate local hour used to seed the solar computation."""

        return EVENT_HOURS[self]

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.hour < other.hour

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.hour <= other.hour

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.hour > other.hour

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.hour >= other.hour


EVENT_HOURS: Dict[Event, float] = {
    Event.sunrise: 6.0,
    Event.sunset: 18.0,
}


@total_ordering
@dataclass(frozen=True)
class SunEvent:
    """A sunrise or sunset measured at a given zenith.

    Instances compare in the order they occur during a day: every sunrise
    precedes every sunset, deeper twilight sunrises come first and deeper
    twilight sunsets come last.
    """

    zenith: Zenith
    event: Event

    DAWN: ClassVar["SunEvent"]
    DUSK: ClassVar["SunEvent"]
    SUNRISE: ClassVar["SunEvent"]
    SUNSET: ClassVar["SunEvent"]

    @property
    def is_sunrise(self) -> bool:
        return self.event is Event.sunrise

    @property
    def is_sunset(self) -> bool:
        return not self.is_sunrise

    def _occurrence_key(self) -> tuple:
        angle = self.zenith.angle
        return (self.event.hour, -angle if self.is_sunrise else angle)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SunEvent):
            return NotImplemented
        return self._occurrence_key() < other._occurrence_key()

    def __str__(self) -> str:
        name = _SHORT_NAMES.get((self.zenith, self.event))
        if name is not None:
            return name
        return f"{self.zenith.value} {self.event.value}"

    @classmethod
    def all(cls) -> List["SunEvent"]:
        """Every zenith/event combination in order of occurrence."""

        return sorted(cls(zenith, event) for zenith in Zenith for event in Event)

    @classmethod
    def from_name(cls, name: str) -> "SunEvent":
        """Parse a display name such as ``dawn`` or ``nautical sunset``.

        Raises
        ------
        ValueError
            If *name* does not describe a known event.
        """

        normalized = " ".join(name.strip().lower().replace("_", " ").replace("-", " ").split())
        try:
            return _NAMED_EVENTS[normalized]
        except KeyError:
            raise ValueError(f"Unknown sun event: {name!r}") from None


_SHORT_NAMES: Dict[tuple, str] = {
    (Zenith.civil, Event.sunrise): "dawn",
    (Zenith.civil, Event.sunset): "dusk",
    (Zenith.official, Event.sunrise): "sunrise",
    (Zenith.official, Event.sunset): "sunset",
}

SunEvent.DAWN = SunEvent(Zenith.civil, Event.sunrise)
SunEvent.DUSK = SunEvent(Zenith.civil, Event.sunset)
SunEvent.SUNRISE = SunEvent(Zenith.official, Event.sunrise)
SunEvent.SUNSET = SunEvent(Zenith.official, Event.sunset)

_NAMED_EVENTS: Dict[str, SunEvent] = {}
for _sun_event in SunEvent.all():
    _NAMED_EVENTS[str(_sun_event)] = _sun_event
    _NAMED_EVENTS[f"{_sun_event.zenith.value} {_sun_event.event.value}"] = _sun_event
del _sun_event
