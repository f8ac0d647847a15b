"""FastAPI application exposing sunrise, sunset and twilight computations."""

from __future__ import annotations

import json
import logging
import os
import time
from datetime import UTC, datetime, timedelta, timezone
from itertools import islice
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models import (
    ErrorResponse,
    EventsResponse,
    HealthResponse,
    OccurrenceModel,
    SunQueryParams,
    SunResponse,
)
from sunevents import Direction, Event, GlobalPosition, SunEvent, SunEvents, Zenith, time_of_event

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("sunrise-api")

APP_DESCRIPTION = (
    "Sunrise, sunset and twilight times from the USNO mean-sun approximation"
)

DEFAULT_MAX_EVENTS = 1000
DEFAULT_CORS_ORIGINS = "https://risesetol.vercel.app"
SCAN_HORIZON_DAYS = 367


def resolve_max_events() -> int:
    """Return the largest ``limit`` accepted by ``/events``."""

    raw = os.environ.get("SUNEVENTS_MAX_EVENTS")
    if not raw:
        return DEFAULT_MAX_EVENTS
    try:
        value = int(raw)
    except ValueError:
        LOGGER.error(json.dumps({"event": "invalid_config", "SUNEVENTS_MAX_EVENTS": raw}))
        return DEFAULT_MAX_EVENTS
    return max(value, 1)


def resolve_cors_origins() -> List[str]:
    raw = os.environ.get("SUNEVENTS_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(
    title="Sunevents API",
    description=APP_DESCRIPTION,
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=resolve_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _format_local(dt: Optional[datetime], offset: timezone) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(offset).isoformat()


def _local_offset(position: GlobalPosition, offset_hours: Optional[float]) -> timezone:
    if offset_hours is None:
        return position.lng_timezone()
    return timezone(timedelta(hours=offset_hours))


def _offset_hours(offset: timezone) -> float:
    return offset.utcoffset(None).total_seconds() / 3600.0


def _never_occurring(
    position: GlobalPosition, whitelist: List[SunEvent], start: datetime, direction: Direction
) -> List[SunEvent]:
    """Return the events that do not occur within a year of *start*.

    A sequence over such events alone would scan day after day without end.
    """

    step = timedelta(days=1) if direction is Direction.forecast else timedelta(days=-1)
    first = start.astimezone(UTC).date()
    missing = []
    for sun_event in whitelist:
        days = (first + step * offset for offset in range(SCAN_HORIZON_DAYS))
        if all(time_of_event(day, position, sun_event) is None for day in days):
            missing.append(sun_event)
    return missing


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        ok=True,
        events=[str(event) for event in SunEvent.all()],
        zeniths={zenith.value: zenith.angle for zenith in Zenith},
    )


@app.get(
    "/sun",
    response_model=SunResponse,
    responses={
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def sun_endpoint(params: SunQueryParams = Depends()) -> SunResponse:
    start_time = time.perf_counter()
    position = GlobalPosition.at(params.lat, params.lon)
    sunrise = time_of_event(params.date_utc, position, SunEvent(params.zenith, Event.sunrise))
    sunset = time_of_event(params.date_utc, position, SunEvent(params.zenith, Event.sunset))

    if sunrise is not None and sunset is not None:
        status = "ok"
    elif sunrise is not None:
        status = "no_sunset"
    elif sunset is not None:
        status = "no_sunrise"
    else:
        status = "no_events"

    offset = _local_offset(position, params.offset_hours)
    duration_ms = (time.perf_counter() - start_time) * 1000.0

    response = SunResponse(
        status=status,
        date_utc=params.date_utc,
        latitude=params.lat,
        longitude=params.lon,
        zenith=params.zenith,
        sunrise_utc=_format_utc(sunrise),
        sunset_utc=_format_utc(sunset),
        offset_hours=_offset_hours(offset),
        sunrise_local=_format_local(sunrise, offset),
        sunset_local=_format_local(sunset, offset),
    )

    LOGGER.info(
        json.dumps(
            {
                "event": "sun",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_utc.isoformat(),
                "zenith": params.zenith.value,
                "status": response.status,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.get(
    "/events",
    response_model=EventsResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def events_endpoint(
    lat: float = Query(..., gt=-90.0, lt=90.0, description="Latitude in degrees"),
    lon: float = Query(..., ge=-180.0, le=180.0, description="Longitude in degrees"),
    start: datetime = Query(..., description="Start instant, UTC when no offset is given"),
    direction: Direction = Query(Direction.forecast, description="forecast or history"),
    event: List[str] = Query(["sunrise", "sunset"], description="Event names to include"),
    limit: int = Query(10, ge=1, description="Number of events to return"),
    offset_hours: Optional[float] = Query(
        None, gt=-24.0, lt=24.0, description="Fixed offset in hours for local times"
    ),
) -> EventsResponse:
    started = time.perf_counter()
    max_events = resolve_max_events()
    if limit > max_events:
        raise HTTPException(status_code=400, detail=f"limit must not exceed {max_events}")
    try:
        whitelist = [SunEvent.from_name(name) for name in event]
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if start.tzinfo is None:
        start = start.replace(tzinfo=UTC)
    position = GlobalPosition.at(lat, lon)
    try:
        sun_events = SunEvents.starting_from(start, position, whitelist)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    missing = _never_occurring(position, sun_events.events, sun_events.start, direction)
    if len(missing) == len(sun_events.events):
        names = ", ".join(str(item) for item in missing)
        raise HTTPException(
            status_code=400,
            detail=f"no {names} within {SCAN_HORIZON_DAYS} days at lat={lat}, lon={lon}",
        )

    if direction is Direction.forecast:
        sequence = sun_events.forecast()
    else:
        sequence = sun_events.history()

    offset = _local_offset(position, offset_hours)
    occurrences = [
        OccurrenceModel(
            name=str(occurrence.event),
            zenith=occurrence.event.zenith,
            event=occurrence.event.event,
            time_utc=_format_utc(occurrence.time),
            time_local=_format_local(occurrence.time, offset),
        )
        for occurrence in islice(sequence, limit)
    ]
    duration_ms = (time.perf_counter() - started) * 1000.0

    LOGGER.info(
        json.dumps(
            {
                "event": "events",
                "lat": lat,
                "lon": lon,
                "start": _format_utc(sun_events.start),
                "direction": direction.value,
                "whitelist": [str(item) for item in sun_events.events],
                "count": len(occurrences),
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return EventsResponse(
        latitude=lat,
        longitude=lon,
        direction=direction,
        start_utc=_format_utc(sun_events.start),
        offset_hours=_offset_hours(offset),
        events=occurrences,
    )
