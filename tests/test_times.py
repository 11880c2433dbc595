from datetime import date, datetime, timedelta

import pytest

from egyptian_prayer_times import Prayer, PrayerCalculator, PrayerTimes

DAY = datetime(2025, 12, 15)


def at(hour, minute=0):
    return DAY.replace(hour=hour, minute=minute)


@pytest.fixture
def times():
    return PrayerTimes(
        fajr=at(5, 10),
        dhuhr=at(11, 50),
        asr=at(14, 38),
        maghrib=at(16, 58),
        isha=at(18, 20),
    )


def test_get_and_to_dict(times):
    mapping = times.to_dict()
    assert list(mapping) == [
        Prayer.FAJR,
        Prayer.DHUHR,
        Prayer.ASR,
        Prayer.MAGHRIB,
        Prayer.ISHA,
    ]
    for prayer, when in mapping.items():
        assert times.get(prayer) == when
    assert times.get(Prayer.ASR) == at(14, 38)


def test_format(times):
    assert times.format() == {
        "fajr": "05:10",
        "dhuhr": "11:50",
        "asr": "14:38",
        "maghrib": "16:58",
        "isha": "18:20",
    }


def test_value_object(times):
    copy = PrayerTimes(**{p.value: w for p, w in times}, clock=lambda: DAY)
    assert copy == times
    with pytest.raises(AttributeError):
        times.fajr = at(4, 0)


@pytest.mark.parametrize(
    "now, expected",
    [
        (at(3), Prayer.FAJR),
        (at(5, 9), Prayer.FAJR),
        (at(5, 10), Prayer.DHUHR),
        (at(12), Prayer.ASR),
        (at(15), Prayer.MAGHRIB),
        (at(17), Prayer.ISHA),
        (at(18, 21), Prayer.FAJR),
        (at(23, 59), Prayer.FAJR),
        (at(5, 9) + timedelta(days=1), Prayer.FAJR),
    ],
)
def test_next_prayer_name(times, now, expected):
    assert times.next_prayer_name(now) is expected


def test_next_prayer_after_isha_is_tomorrow_fajr(times):
    now = at(18, 21)
    assert times.next_prayer(now) == at(5, 10) + timedelta(days=1)
    assert times.time_remaining(now) == timedelta(hours=10, minutes=49)


def test_next_prayer_before_fajr_is_today(times):
    assert times.next_prayer(at(3)) == at(5, 10)
    assert times.time_remaining(at(3)) == timedelta(hours=2, minutes=10)
    assert times.next_prayer(at(12)) == at(14, 38)


def test_nothing_left_after_tomorrow_fajr(times):
    now = times.tomorrow_fajr + timedelta(minutes=1)
    assert times.next_prayer_name(now) is None
    assert times.next_prayer(now) is None
    assert times.time_remaining(now) is None
    assert times.current_prayer_name(now) is None


@pytest.mark.parametrize(
    "now, expected",
    [
        (at(3), None),
        (at(5, 10), None),
        (at(11, 50), None),
        (at(18, 20), None),
        (at(8, 30), Prayer.FAJR),
        (at(13), Prayer.DHUHR),
        (at(15), Prayer.ASR),
        (at(17), Prayer.MAGHRIB),
        (at(18, 21), Prayer.ISHA),
        (at(4) + timedelta(days=1), Prayer.ISHA),
    ],
)
def test_current_prayer_name(times, now, expected):
    assert times.current_prayer_name(now) is expected


def test_current_prayer_at_fajr_dhuhr_midpoint(times):
    midpoint = times.fajr + (times.dhuhr - times.fajr) / 2
    assert times.current_prayer_name(midpoint) is Prayer.FAJR


def test_queries_default_to_injected_clock(times):
    clocked = PrayerTimes(**{p.value: w for p, w in times}, clock=lambda: at(13))
    assert clocked.next_prayer_name() is Prayer.ASR
    assert clocked.next_prayer() == at(14, 38)
    assert clocked.time_remaining() == timedelta(hours=1, minutes=38)
    assert clocked.current_prayer_name() is Prayer.DHUHR


@pytest.mark.parametrize(
    "day",
    [date(2025, 1, 1), date(2025, 3, 20), date(2025, 6, 21), date(2025, 12, 15)],
)
def test_boundaries_around_computed_day(day):
    times = PrayerCalculator(30.0444, 31.2357, 2.0).calculate(day)
    minute = timedelta(minutes=1)

    assert times.next_prayer_name(times.fajr - minute) is Prayer.FAJR
    assert times.next_prayer(times.fajr - minute) == times.fajr
    assert times.next_prayer_name(times.isha + minute) is Prayer.FAJR
    assert times.next_prayer(times.isha + minute) == times.fajr + timedelta(days=1)
    assert times.current_prayer_name(times.isha + minute) is Prayer.ISHA
    assert times.current_prayer_name(times.fajr - minute) is None
