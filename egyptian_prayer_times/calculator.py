"""
Prayer times using the Egyptian General Authority of Survey method.
Fajr: 19.5°, Isha: 17.5°, Maghrib: sunset (0.833°) + 1 minute,
Asr: shadow = k × object + noon shadow (k = 1 Standard/Shafi, 2 Hanafi).
"""

import dataclasses
import logging
import math
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterator

from egyptian_prayer_times import astro
from egyptian_prayer_times.params import AsrMethod, CalculationParams
from egyptian_prayer_times.times import PrayerTimes

logger = logging.getLogger(__name__)

FAJR_ANGLE = 19.5
ISHA_ANGLE = 17.5
SUNSET_ANGLE = 0.833
MAGHRIB_OFFSET = timedelta(minutes=1)


def fraction_to_datetime(jd: float, fraction: float) -> datetime:
    """Local datetime for a fraction of the day at `jd`, rounded to the minute."""
    day = astro.julian_day_to_date(jd)
    minutes = round(astro.normalize_fraction(fraction) * astro.MINUTES_PER_DAY)
    # 23:59:30 and later stays on the same date
    minutes %= int(astro.MINUTES_PER_DAY)
    return datetime.combine(day, time(minutes // 60, minutes % 60))


def _asr_altitude(latitude: float, declination: float, shadow_factor: float) -> float:
    """Sun altitude (degrees) when a shadow reaches k × height + noon shadow."""
    lat_r = astro.deg2rad(latitude)
    decl_r = astro.deg2rad(declination)
    cot_alt = shadow_factor + abs(math.tan(lat_r - decl_r))
    return astro.rad2deg(math.atan(1.0 / cot_alt))


def calculate(day: date | datetime, params: CalculationParams) -> PrayerTimes:
    """Five prayer instants for the calendar date of `day` at `params`."""
    if isinstance(day, datetime):
        day = day.date()

    jd = astro.julian_day(day)
    sun = astro.solar_position(jd)
    lat, lng, tz = params.latitude, params.longitude, params.timezone
    decl, eqtime = sun.declination, sun.equation_of_time

    def at_angle(altitude: float, evening: bool) -> datetime:
        ha = astro.hour_angle(lat, decl, altitude)
        fraction = astro.time_at_altitude(jd, lng, tz, eqtime, ha if evening else -ha)
        return fraction_to_datetime(jd, fraction)

    dhuhr = fraction_to_datetime(jd, astro.solar_noon(lng, tz, eqtime))
    fajr = at_angle(-FAJR_ANGLE, evening=False)
    asr = at_angle(
        _asr_altitude(lat, decl, params.asr_method.shadow_factor), evening=True
    )
    maghrib = at_angle(-SUNSET_ANGLE, evening=True) + MAGHRIB_OFFSET
    isha = at_angle(-ISHA_ANGLE, evening=True)

    logger.debug(
        "%s lat=%s lng=%s tz=%s asr=%s: fajr=%s dhuhr=%s asr=%s maghrib=%s isha=%s",
        day,
        lat,
        lng,
        tz,
        params.asr_method.value,
        fajr.time(),
        dhuhr.time(),
        asr.time(),
        maghrib.time(),
        isha.time(),
    )
    return PrayerTimes(fajr=fajr, dhuhr=dhuhr, asr=asr, maghrib=maghrib, isha=isha)


class PrayerCalculator:
    """
    Calculator bound to one location.

    The clock is only read when `calculate()` is called without a date; the
    returned PrayerTimes uses the same clock for its default `now`.
    """

    def __init__(
        self,
        latitude: float,
        longitude: float,
        timezone: float | None = None,
        asr_method: AsrMethod | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.params = CalculationParams(
            latitude=latitude,
            longitude=longitude,
            timezone=timezone if timezone is not None else 0.0,
            asr_method=asr_method or AsrMethod.STANDARD,
        )
        self.clock = clock

    @classmethod
    def from_params(
        cls, params: CalculationParams, clock: Callable[[], datetime] = datetime.now
    ) -> "PrayerCalculator":
        return cls(
            params.latitude,
            params.longitude,
            timezone=params.timezone,
            asr_method=params.asr_method,
            clock=clock,
        )

    @classmethod
    def with_local_timezone(
        cls,
        latitude: float,
        longitude: float,
        asr_method: AsrMethod | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "PrayerCalculator":
        params = CalculationParams.with_local_timezone(
            latitude,
            longitude,
            asr_method=asr_method or AsrMethod.STANDARD,
            now=clock().astimezone(),
        )
        return cls.from_params(params, clock)

    def calculate(self, day: date | datetime | None = None) -> PrayerTimes:
        if day is None:
            day = self.clock()
        return dataclasses.replace(calculate(day, self.params), clock=self.clock)

    def calculate_range(self, start: date, days: int) -> Iterator[PrayerTimes]:
        for i in range(days):
            yield self.calculate(start + timedelta(days=i))

    def __repr__(self) -> str:
        p = self.params
        return (
            f"PrayerCalculator(latitude={p.latitude}, longitude={p.longitude}, "
            f"timezone={p.timezone}, asr_method={p.asr_method.value})"
        )
