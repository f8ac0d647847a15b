"""Sunrise, sunset and twilight times for any position on Earth."""

from .astro import time_of_event
from .event import Event, SunEvent, Zenith
from .position import GlobalPosition
from .sequence import Direction, EventOccurrence, SunEvents, SunEventSequence

__all__ = [
    "time_of_event",
    "Event",
    "SunEvent",
    "Zenith",
    "GlobalPosition",
    "Direction",
    "EventOccurrence",
    "SunEvents",
    "SunEventSequence",
]
