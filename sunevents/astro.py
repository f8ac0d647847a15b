"""Sunrise and sunset times from the mean-sun approximation."""

from __future__ import annotations

import json
import logging
import math
from datetime import UTC, date, datetime, time, timedelta
from typing import Optional

from .event import SunEvent
from .position import GlobalPosition

__all__ = ["time_of_event"]

LOGGER = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


def time_of_event(
    event_date: date, position: GlobalPosition, event: SunEvent
) -> Optional[datetime]:
    """Return the UTC instant of *event* on *event_date* at *position*.

    This is the algorithm published by the United States Naval Observatory in
    the Almanac for Computers, see http://edwilliams.org/sunrise_sunset_algorithm.htm

    Parameters
    ----------
    event_date:
        Calendar date the event belongs to. For positions far east or west of
        Greenwich the returned instant may fall on the neighbouring UTC day.
    position:
        Observer position.
    event:
        Which sunrise or sunset to compute.

    Returns
    -------
    datetime | None
        Timezone-aware UTC datetime, or ``None`` when the sun does not cross
        the requested zenith on that day (polar day or polar night).
    """

    day_of_year = event_date.timetuple().tm_yday
    t = _approximate_time(day_of_year, event, position)
    mean_anomaly = _mean_anomaly(t)
    longitude = _true_longitude(mean_anomaly)
    right_ascension = _right_ascension(longitude)
    hour_angle = _local_hour_angle(longitude, position, event)
    if hour_angle is None:
        LOGGER.debug(
            json.dumps(
                {
                    "event": "no_occurrence",
                    "sun_event": str(event),
                    "date": event_date.isoformat(),
                    "lat": position.lat,
                    "lon": position.lng,
                }
            )
        )
        return None

    local_time = _local_mean_time(hour_angle, right_ascension, t)
    universal_time = (local_time - position.lng_hour) % 24.0
    seconds = round(universal_time * SECONDS_PER_HOUR)

    day = date(event_date.year, event_date.month, event_date.day)
    if position.lng_hour > 0 and universal_time > 12.0 and event.is_sunrise:
        day -= timedelta(days=1)
    elif position.lng_hour < 0 and universal_time < 12.0 and event.is_sunset:
        day += timedelta(days=1)

    return datetime.combine(day, time.min, tzinfo=UTC) + timedelta(seconds=seconds)


def _approximate_time(day_of_year: int, event: SunEvent, position: GlobalPosition) -> float:
    return day_of_year + ((event.event.hour - position.lng_hour) / 24.0)


def _mean_anomaly(t: float) -> float:
    return (0.9856 * t) - 3.289


def _true_longitude(mean_anomaly: float) -> float:
    m = math.radians(mean_anomaly)
    longitude = mean_anomaly + (1.916 * math.sin(m)) + (0.020 * math.sin(2.0 * m)) + 282.634
    return longitude % 360.0


def _right_ascension(longitude: float) -> float:
    """Right ascension in hours, placed in the same quadrant as *longitude*."""

    ra = math.degrees(math.atan(0.91764 * math.tan(math.radians(longitude)))) % 360.0
    longitude_quadrant = math.floor(longitude / 90.0) * 90.0
    ra_quadrant = math.floor(ra / 90.0) * 90.0
    return (ra + (longitude_quadrant - ra_quadrant)) / 15.0


def _local_hour_angle(
    longitude: float, position: GlobalPosition, event: SunEvent
) -> Optional[float]:
    sin_dec = 0.39782 * math.sin(math.radians(longitude))
    cos_dec = math.cos(math.asin(sin_dec))
    zenith = math.radians(event.zenith.angle)
    lat = math.radians(position.lat)
    cos_h = (math.cos(zenith) - (sin_dec * math.sin(lat))) / (cos_dec * math.cos(lat))
    # cos_h > 1: the sun stays below the zenith all day.
    # cos_h < -1: the sun stays above it. NaN covers degenerate coordinates.
    if not -1.0 <= cos_h <= 1.0:
        return None
    if event.is_sunrise:
        hour_angle = 360.0 - math.degrees(math.acos(cos_h))
    else:
        hour_angle = math.degrees(math.acos(cos_h))
    return hour_angle / 15.0


def _local_mean_time(hour_angle: float, right_ascension: float, t: float) -> float:
    return hour_angle + right_ascension - (0.06571 * t) - 6.622
