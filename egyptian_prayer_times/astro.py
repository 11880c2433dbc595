"""
Solar position and time-of-day formulas (NOAA / Meeus low-precision series).
All angles are degrees unless the name says radians. Nothing here raises for
out-of-range geometry: the hour angle is clamped instead.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date

logger = logging.getLogger(__name__)

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
MINUTES_PER_DAY = 1440.0
GREGORIAN_CUTOVER = 2299161


def deg2rad(d: float) -> float:
    return d * math.pi / 180.0


def rad2deg(r: float) -> float:
    return r * 180.0 / math.pi


def normalize_fraction(fraction: float) -> float:
    """Wrap a fraction of a day into [0, 1)."""
    while fraction < 0:
        fraction += 1.0
    while fraction >= 1.0:
        fraction -= 1.0
    return fraction


def julian_day(day: date) -> float:
    """
    Julian day at 0h UT of the given date, always read as proleptic Gregorian.
    julian_day_to_date only inverts this from 1582-10-15 onward.
    """
    year, month = day.year, day.month
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day.day
        + b
        - 1524.5
    )


def julian_day_to_date(jd: float) -> date:
    """
    Calendar date containing the given Julian day. Days before the Gregorian
    reform (Z < 2299161) come back in the Julian calendar.
    """
    j = jd + 0.5
    z = math.floor(j)
    f = j - z

    if z < GREGORIAN_CUTOVER:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return date(year, month, math.floor(day))


def julian_century(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_CENTURY


def sun_geometric_mean_longitude(jc: float) -> float:
    l0 = 280.46646 + jc * (36000.76983 + jc * 0.0003032)
    return l0 % 360.0


def sun_geometric_mean_anomaly(jc: float) -> float:
    m = 357.52911 + jc * (35999.05029 - 0.0001537 * jc)
    return m % 360.0


def sun_equation_of_center(jc: float, mean_anomaly: float) -> float:
    m = deg2rad(mean_anomaly)
    return (
        math.sin(m) * (1.914602 - jc * (0.004817 + 0.000014 * jc))
        + math.sin(2 * m) * (0.019993 - 0.000101 * jc)
        + math.sin(3 * m) * 0.000289
    )


def sun_true_longitude(mean_longitude: float, equation_of_center: float) -> float:
    return mean_longitude + equation_of_center


def _omega(jc: float) -> float:
    """Longitude of the Moon's ascending node, for nutation terms."""
    return 125.04 - 1934.136 * jc


def sun_apparent_longitude(true_longitude: float, jc: float) -> float:
    return true_longitude - 0.00569 - 0.00478 * math.sin(deg2rad(_omega(jc)))


def mean_obliquity_of_ecliptic(jc: float) -> float:
    seconds = 21.448 - jc * (46.8150 + jc * (0.00059 - jc * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def obliquity_correction(mean_obliquity: float, jc: float) -> float:
    return mean_obliquity + 0.00256 * math.cos(deg2rad(_omega(jc)))


def sun_declination(apparent_longitude: float, obliquity: float) -> float:
    sin_decl = math.sin(deg2rad(obliquity)) * math.sin(deg2rad(apparent_longitude))
    return rad2deg(math.asin(sin_decl))


def equation_of_time(
    jc: float,
    mean_longitude: float,
    mean_anomaly: float,
    obliquity: float,
) -> float:
    """Apparent minus mean solar time, in minutes."""
    l0 = deg2rad(mean_longitude)
    m = deg2rad(mean_anomaly)
    e = 0.016708634 - jc * (0.000042037 + 0.0000001267 * jc)
    y = math.tan(deg2rad(obliquity) / 2) ** 2

    eq = (
        y * math.sin(2 * l0)
        - 2 * e * math.sin(m)
        + 4 * e * y * math.sin(m) * math.cos(2 * l0)
        - 0.5 * y * y * math.sin(4 * l0)
        - 1.25 * e * e * math.sin(2 * m)
    )
    return rad2deg(eq) * 4


@dataclass(frozen=True)
class SolarPosition:
    """Ephemeris values for one Julian day, shared by every prayer of that day."""

    jd: float
    jc: float
    mean_longitude: float
    mean_anomaly: float
    apparent_longitude: float
    obliquity: float
    declination: float  # degrees
    equation_of_time: float  # minutes


def solar_position(jd: float) -> SolarPosition:
    jc = julian_century(jd)
    mean_longitude = sun_geometric_mean_longitude(jc)
    mean_anomaly = sun_geometric_mean_anomaly(jc)
    center = sun_equation_of_center(jc, mean_anomaly)
    true_longitude = sun_true_longitude(mean_longitude, center)
    apparent_longitude = sun_apparent_longitude(true_longitude, jc)
    obliquity = obliquity_correction(mean_obliquity_of_ecliptic(jc), jc)

    position = SolarPosition(
        jd=jd,
        jc=jc,
        mean_longitude=mean_longitude,
        mean_anomaly=mean_anomaly,
        apparent_longitude=apparent_longitude,
        obliquity=obliquity,
        declination=sun_declination(apparent_longitude, obliquity),
        equation_of_time=equation_of_time(jc, mean_longitude, mean_anomaly, obliquity),
    )
    logger.debug(
        "jd=%.1f declination=%.4f eqtime=%.3fmin",
        jd,
        position.declination,
        position.equation_of_time,
    )
    return position


def hour_angle(latitude: float, declination: float, altitude: float) -> float:
    """
    Hour angle (degrees, >= 0) at which the sun stands at `altitude`.
    The caller decides morning (negative) or evening (positive) side.
    """
    lat_r = deg2rad(latitude)
    decl_r = deg2rad(declination)
    # sin(alt) = sin(lat)*sin(decl) + cos(lat)*cos(decl)*cos(H)
    cos_h = (math.sin(deg2rad(altitude)) - math.sin(lat_r) * math.sin(decl_r)) / (
        math.cos(lat_r) * math.cos(decl_r)
    )
    if cos_h < -1 or cos_h > 1:
        logger.debug(
            "sun never reaches %.3f deg at lat=%.4f decl=%.4f; clamping",
            altitude,
            latitude,
            declination,
        )
        cos_h = min(1.0, max(-1.0, cos_h))
    return rad2deg(math.acos(cos_h))


def solar_noon(longitude: float, timezone: float, eq_time: float) -> float:
    """Local solar noon as a fraction of the day (not wrapped)."""
    return (720 - 4 * longitude - eq_time + timezone * 60) / MINUTES_PER_DAY


def time_at_altitude(
    jd: float,
    longitude: float,
    timezone: float,
    eq_time: float,
    hour_angle_deg: float,
) -> float:
    """Fraction of the local day, in [0, 1), at the given signed hour angle."""
    noon = solar_noon(longitude, timezone, eq_time)
    return normalize_fraction(noon + hour_angle_deg * 4 / MINUTES_PER_DAY)
