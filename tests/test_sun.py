from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta

import pytest

from sunevents import Event, GlobalPosition, SunEvent, Zenith, time_of_event
from sunevents.astro import _right_ascension, _true_longitude


def _assert_close(actual: datetime | None, expected: datetime, tolerance_s: float = 1.0) -> None:
    assert actual is not None
    assert abs((actual - expected).total_seconds()) <= tolerance_s


def test_greenwich_midsummer_sunrise_sunset(greenwich: GlobalPosition) -> None:
    day = date(2020, 6, 21)
    sunrise = time_of_event(day, greenwich, SunEvent.SUNRISE)
    sunset = time_of_event(day, greenwich, SunEvent.SUNSET)
    _assert_close(sunrise, datetime(2020, 6, 21, 3, 49, 47, tzinfo=UTC))
    _assert_close(sunset, datetime(2020, 6, 21, 20, 13, 55, tzinfo=UTC))


def test_greenwich_sunrise_near_published_almanac(greenwich: GlobalPosition) -> None:
    # Published sunrise 03:43 UTC includes refraction; the 90 degree zenith
    # lands a few minutes later.
    sunrise = time_of_event(date(2020, 6, 21), greenwich, SunEvent.SUNRISE)
    _assert_close(sunrise, datetime(2020, 6, 21, 3, 43, tzinfo=UTC), tolerance_s=10 * 60)


def test_greenwich_midwinter_sunrise(greenwich: GlobalPosition) -> None:
    sunrise = time_of_event(date(2020, 12, 21), greenwich, SunEvent.SUNRISE)
    _assert_close(sunrise, datetime(2020, 12, 21, 8, 10, 21, tzinfo=UTC))


def test_civil_twilight_brackets_official_events(greenwich: GlobalPosition) -> None:
    day = date(2020, 6, 21)
    dawn = time_of_event(day, greenwich, SunEvent.DAWN)
    dusk = time_of_event(day, greenwich, SunEvent.DUSK)
    _assert_close(dawn, datetime(2020, 6, 21, 2, 55, 2, tzinfo=UTC))
    _assert_close(dusk, datetime(2020, 6, 21, 21, 8, 39, tzinfo=UTC))
    assert dawn < time_of_event(day, greenwich, SunEvent.SUNRISE)
    assert dusk > time_of_event(day, greenwich, SunEvent.SUNSET)


def test_east_longitude_sunrise_moves_to_previous_day(tokyo: GlobalPosition) -> None:
    sunrise = time_of_event(date(2020, 6, 21), tokyo, SunEvent.SUNRISE)
    _assert_close(sunrise, datetime(2020, 6, 20, 19, 30, 36, tzinfo=UTC))
    # Recovering the requested date means undoing the correction.
    assert (sunrise + tokyo.lng_timezone().utcoffset(None)).date() == date(2020, 6, 21)


def test_west_longitude_sunset_moves_to_next_day() -> None:
    position = GlobalPosition.at(40.7608, -111.8910)
    sunset = time_of_event(date(2020, 6, 21), position, SunEvent.SUNSET)
    _assert_close(sunset, datetime(2020, 6, 22, 2, 57, 20, tzinfo=UTC))


def test_polar_night_has_no_sunrise(arctic: GlobalPosition) -> None:
    assert time_of_event(date(2020, 12, 21), arctic, SunEvent.SUNRISE) is None
    assert time_of_event(date(2020, 12, 21), arctic, SunEvent.SUNSET) is None


def test_polar_day_has_no_sunset(arctic: GlobalPosition) -> None:
    assert time_of_event(date(2020, 6, 21), arctic, SunEvent.SUNSET) is None
    assert time_of_event(date(2020, 6, 21), arctic, SunEvent.SUNRISE) is None


def test_degenerate_coordinates_have_no_events() -> None:
    pole = GlobalPosition.at(90.0, 0.0)
    nowhere = GlobalPosition.at(math.nan, 0.0)
    for event in (SunEvent.SUNRISE, SunEvent.SUNSET):
        assert time_of_event(date(2020, 3, 1), pole, event) is None
        assert time_of_event(date(2020, 3, 1), nowhere, event) is None


def test_result_is_deterministic(greenwich: GlobalPosition) -> None:
    day = date(2021, 9, 3)
    event = SunEvent(Zenith.nautical, Event.sunset)
    assert time_of_event(day, greenwich, event) == time_of_event(day, greenwich, event)


def test_result_is_utc_and_whole_seconds(salt_lake_city: GlobalPosition) -> None:
    for offset in range(0, 365, 17):
        day = date(2021, 1, 1) + timedelta(days=offset)
        for event in SunEvent.all():
            moment = time_of_event(day, salt_lake_city, event)
            if moment is None:
                continue
            assert moment.utcoffset() == timedelta(0)
            assert moment.microsecond == 0
            assert abs((moment.date() - day).days) <= 1


def test_golden_hour_is_inside_daylight(greenwich: GlobalPosition) -> None:
    day = date(2021, 4, 10)
    golden_rise = time_of_event(day, greenwich, SunEvent(Zenith.golden, Event.sunrise))
    golden_set = time_of_event(day, greenwich, SunEvent(Zenith.golden, Event.sunset))
    assert time_of_event(day, greenwich, SunEvent.SUNRISE) < golden_rise
    assert golden_set < time_of_event(day, greenwich, SunEvent.SUNSET)


@pytest.mark.parametrize("longitude", [0.5, 45.0, 89.9, 90.0, 135.0, 180.0, 200.0, 271.0, 359.9])
def test_true_longitude_is_normalized(longitude: float) -> None:
    assert 0.0 <= _true_longitude(longitude) < 360.0
    assert 0.0 <= _true_longitude(-longitude) < 360.0


@pytest.mark.parametrize("longitude", [10.0, 100.0, 190.0, 280.0])
def test_right_ascension_shares_quadrant_with_longitude(longitude: float) -> None:
    ra_degrees = _right_ascension(longitude) * 15.0
    assert math.floor(ra_degrees / 90.0) == math.floor(longitude / 90.0)
