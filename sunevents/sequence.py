"""Iterators over sun events moving forward or backward in time."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .astro import time_of_event
from .event import SunEvent
from .position import GlobalPosition

__all__ = ["Direction", "EventOccurrence", "SunEvents", "SunEventSequence"]

LOGGER = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
END_OF_DAY = time(23, 59, 59)


class Direction(str, Enum):
    """Direction in which a sequence walks through time."""

    forecast = "forecast"
    history = "history"


class EventOccurrence(NamedTuple):
    event: SunEvent
    time: datetime


class _Phase(Enum):
    SCAN = "scan"
    NEXT_DAY = "next_day"


@dataclass
class _Cursor:
    """Mutable scan state of a single sequence.

    ``agenda`` holds the whitelisted occurrences falling on the UTC date of
    ``current_time``, ordered in the direction of travel. ``index`` points at
    the next agenda entry; once it runs off the end the cursor switches to the
    ``NEXT_DAY`` phase, which moves ``current_time`` to the neighbouring day.
    """

    position: GlobalPosition
    current_time: datetime
    events: Tuple[SunEvent, ...]
    direction: Direction
    agenda: List[EventOccurrence] = field(default_factory=list)
    index: int = 0
    phase: _Phase = _Phase.NEXT_DAY
    day: Optional[date] = None

    def step(self) -> EventOccurrence:
        while True:
            if self.phase is _Phase.NEXT_DAY:
                if self.day is not None:
                    self._advance_day()
                self._load_agenda()
                continue

            if self.index >= len(self.agenda):
                self.phase = _Phase.NEXT_DAY
                continue

            occurrence = self.agenda[self.index]
            self.index += 1
            if self._is_ahead(occurrence.time):
                self.current_time = occurrence.time
                return occurrence

    def _is_ahead(self, moment: datetime) -> bool:
        if self.direction is Direction.forecast:
            return moment > self.current_time
        return moment < self.current_time

    def _advance_day(self) -> None:
        if self.direction is Direction.forecast:
            following = self.current_time.date() + ONE_DAY
            self.current_time = datetime.combine(following, time.min, tzinfo=UTC)
        else:
            preceding = self.current_time.date() - ONE_DAY
            self.current_time = datetime.combine(preceding, END_OF_DAY, tzinfo=UTC)

    def _load_agenda(self) -> None:
        self.day = self.current_time.date()
        self.agenda = _occurrences_on(self.day, self.position, self.events)
        if self.direction is Direction.history:
            self.agenda.reverse()
        self.index = 0
        self.phase = _Phase.SCAN


def _occurrences_on(
    day: date, position: GlobalPosition, events: Iterable[SunEvent]
) -> List[EventOccurrence]:
    """Return the occurrences whose UTC instant falls on *day*, in time order.

    An event computed for a given date may land on the previous or next UTC
    day, so the neighbouring dates are evaluated as well.
    """

    found = set()
    for event in events:
        for offset in (-1, 0, 1):
            moment = time_of_event(day + timedelta(days=offset), position, event)
            if moment is not None and moment.date() == day:
                found.add(EventOccurrence(event, moment))
    return sorted(found, key=lambda occurrence: (occurrence.time, occurrence.event))


def _normalize_whitelist(whitelist: Iterable[SunEvent]) -> Tuple[SunEvent, ...]:
    events = tuple(sorted(set(whitelist)))
    if not events:
        raise ValueError("event whitelist must not be empty")
    return events


@dataclass(frozen=True)
class SunEvents:
    """Sun events at a position around a starting instant.

    Use :meth:`starting_from` to build one, then :meth:`forecast` or
    :meth:`history` to list the events after or before the start.
    """

    position: GlobalPosition
    start: datetime
    events: Tuple[SunEvent, ...]

    @classmethod
    def starting_from(
        cls,
        start: datetime,
        position: GlobalPosition,
        event_whitelist: Iterable[SunEvent],
    ) -> "SunEvents":
        """List the events in *event_whitelist* around *start* at *position*.

        Raises
        ------
        ValueError
            If *event_whitelist* is empty or *start* is a naive datetime.
        """

        if start.tzinfo is None:
            raise ValueError("start must be timezone-aware")
        events = _normalize_whitelist(event_whitelist)
        start_utc = start.astimezone(UTC)
        LOGGER.debug(
            json.dumps(
                {
                    "event": "sequence_created",
                    "start": start_utc.isoformat(),
                    "lat": position.lat,
                    "lon": position.lng,
                    "whitelist": [str(event) for event in events],
                }
            )
        )
        return cls(position=position, start=start_utc, events=events)

    def forecast(self) -> "SunEventSequence":
        """Events occurring after the start, earliest first."""

        return SunEventSequence(self, Direction.forecast)

    def history(self) -> "SunEventSequence":
        """Events occurring before the start, latest first."""

        return SunEventSequence(self, Direction.history)


class SunEventSequence(Iterator[EventOccurrence]):
    """Infinite iterator of :class:`EventOccurrence` in one direction.

    Each iterator owns its cursor. It cannot be rewound; build a new
    :class:`SunEvents` from the last yielded time to continue elsewhere.
    """

    def __init__(self, events: SunEvents, direction: Direction) -> None:
        self._cursor = _Cursor(
            position=events.position,
            current_time=events.start,
            events=events.events,
            direction=direction,
        )

    @property
    def direction(self) -> Direction:
        return self._cursor.direction

    @property
    def current_time(self) -> datetime:
        return self._cursor.current_time

    def __iter__(self) -> "SunEventSequence":
        return self

    def __next__(self) -> EventOccurrence:
        return self._cursor.step()
