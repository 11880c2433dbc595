import logging
import os
from datetime import datetime, timedelta, timezone

from fastapi import FastAPI, HTTPException, Query

from egyptian_prayer_times import AsrMethod, InvalidArgumentError, PrayerCalculator

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("prayer_times_api")

app = FastAPI(
    title="Prayer Times API",
    description="Offline Islamic prayer times (Egyptian General Authority of Survey method)",
    version="1.0.0"
)


@app.get("/")
def root():
    return {
        "service": "Prayer Times API",
        "status": "online",
        "endpoints": {
            "/api/timesForGPS": "Get prayer times for GPS coordinates",
            "/api/nextPrayer": "Get the next and current prayer for GPS coordinates",
        }
    }


def offset_clock(timezone_offset: int):
    """Wall clock of the caller's timezone (minutes east of UTC), as naive datetimes."""
    offset = timedelta(minutes=timezone_offset)

    def now() -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None) + offset

    return now


def build_calculator(lat: float, lng: float, timezone_offset: int, asr_method: str) -> PrayerCalculator:
    # Convert minutes to hours (e.g., 120 -> 2.0)
    try:
        return PrayerCalculator(
            latitude=lat,
            longitude=lng,
            timezone=timezone_offset / 60.0,
            asr_method=AsrMethod.parse(asr_method),
            clock=offset_clock(timezone_offset),
        )
    except InvalidArgumentError as e:
        logger.info("Rejected parameters: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


def parse_when(value: str, fmt: str, name: str) -> datetime:
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{name} must match {fmt}")


@app.get("/api/timesForGPS")
def get_times_for_gps(
    lat: float,
    lng: float,
    date: str,
    days: int = Query(1, ge=1, le=366),
    timezoneOffset: int = 0, # Minutes east of UTC, e.g., 120
    asrMethod: str = "standard",
):
    calculator = build_calculator(lat, lng, timezoneOffset, asrMethod)
    start_date = parse_when(date, "%Y-%m-%d", "date").date()
    logger.info("timesForGPS %s lat=%s lng=%s days=%d", start_date, lat, lng, days)

    response_times = {}
    for times in calculator.calculate_range(start_date, days):
        # [0]: Fajr, [1]: Dhuhr, [2]: Asr, [3]: Maghrib, [4]: Isha
        response_times[times.fajr.strftime("%Y-%m-%d")] = list(times.format().values())

    return {"times": response_times}


@app.get("/api/nextPrayer")
def get_next_prayer(
    lat: float,
    lng: float,
    timezoneOffset: int = 0,
    asrMethod: str = "standard",
    now: str | None = Query(None, description="Local time, YYYY-MM-DDTHH:MM"),
):
    calculator = build_calculator(lat, lng, timezoneOffset, asrMethod)
    current = parse_when(now, "%Y-%m-%dT%H:%M", "now") if now else calculator.clock()
    times = calculator.calculate(current)

    name = times.next_prayer_name(current)
    upcoming = times.next_prayer(current)
    remaining = times.time_remaining(current)
    current_name = times.current_prayer_name(current)
    return {
        "now": current.strftime("%Y-%m-%dT%H:%M"),
        "next": name.value if name else None,
        "nextTime": upcoming.strftime("%Y-%m-%dT%H:%M") if upcoming else None,
        "remainingSeconds": int(remaining.total_seconds()) if remaining is not None else None,
        "current": current_name.value if current_name else None,
        "times": times.format(),
    }
