"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sunevents import Direction, Event, Zenith


class SunQueryParams(BaseModel):
    """Validated query parameters for the ``/sun`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., gt=-90.0, lt=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    date_utc: date = Field(..., alias="date", description="Calendar date (YYYY-MM-DD)")
    zenith: Zenith = Field(Zenith.official, description="Zenith the events are measured at")
    offset_hours: Optional[float] = Field(
        None,
        description="Optional fixed offset in hours applied to derive local times",
    )

    @field_validator("offset_hours")
    def validate_offset_hours(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return value
        if not -24.0 < value < 24.0:
            raise ValueError("offset_hours must be within ±24 hours")
        return value


class SunResponse(BaseModel):
    """Sunrise/sunset for a single date."""

    ok: bool = True
    status: Literal["ok", "no_sunrise", "no_sunset", "no_events"] = Field(
        ..., description="Which of the two events occur on the date"
    )
    date_utc: date = Field(..., description="Requested calendar date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    zenith: Zenith = Field(..., description="Applied zenith")
    sunrise_utc: Optional[str] = Field(None, description="Sunrise time in UTC (ISO-8601)")
    sunset_utc: Optional[str] = Field(None, description="Sunset time in UTC (ISO-8601)")
    offset_hours: float = Field(
        ..., description="Offset in hours used for the local times"
    )
    sunrise_local: Optional[str] = Field(None, description="Sunrise expressed in local time")
    sunset_local: Optional[str] = Field(None, description="Sunset expressed in local time")


class OccurrenceModel(BaseModel):
    """A single entry of an event sequence."""

    name: str = Field(..., description="Display name of the event, e.g. 'dawn'")
    zenith: Zenith
    event: Event
    time_utc: str = Field(..., description="Event time in UTC (ISO-8601)")
    time_local: str = Field(..., description="Event time at the applied offset")


class EventsResponse(BaseModel):
    """A slice of a forecast or history sequence."""

    ok: bool = True
    latitude: float
    longitude: float
    direction: Direction
    start_utc: str = Field(..., description="Instant the sequence started from")
    offset_hours: float = Field(..., description="Offset in hours used for the local times")
    events: List[OccurrenceModel]


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    events: List[str] = Field(..., description="Every supported event name")
    zeniths: Dict[str, float] = Field(..., description="Zenith angles in degrees")


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
