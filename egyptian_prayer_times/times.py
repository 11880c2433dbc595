"""The five prayer instants of one day and queries relative to a given moment."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Iterator


class Prayer(Enum):
    FAJR = "fajr"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"


# Scan order for next/current prayer resolution
ORDER = (Prayer.FAJR, Prayer.DHUHR, Prayer.ASR, Prayer.MAGHRIB, Prayer.ISHA)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class PrayerTimes:
    """
    Naive local datetimes for one calendar day.

    Query methods take an optional `now`; when omitted, `clock()` is read at
    call time. Tomorrow's Fajr is approximated as today's Fajr + 24h.
    """

    fajr: datetime
    dhuhr: datetime
    asr: datetime
    maghrib: datetime
    isha: datetime
    clock: Callable[[], datetime] = field(
        default=datetime.now, repr=False, compare=False
    )

    def get(self, prayer: Prayer) -> datetime:
        return getattr(self, prayer.value)

    def __iter__(self) -> Iterator[tuple[Prayer, datetime]]:
        for prayer in ORDER:
            yield prayer, self.get(prayer)

    def to_dict(self) -> dict[Prayer, datetime]:
        return dict(self)

    def format(self, fmt: str = "%H:%M") -> dict[str, str]:
        """Prayer name -> formatted time, in prayer order."""
        return {prayer.value: when.strftime(fmt) for prayer, when in self}

    @property
    def tomorrow_fajr(self) -> datetime:
        return self.fajr + ONE_DAY

    def _resolve(self, now: datetime | None) -> datetime:
        return self.clock() if now is None else now

    def next_prayer_name(self, now: datetime | None = None) -> Prayer | None:
        """
        First prayer strictly after `now`. Past Isha this is Fajr as long as
        tomorrow's Fajr is still ahead, otherwise None.
        """
        now = self._resolve(now)
        for prayer, when in self:
            if when > now:
                return prayer
        if self.tomorrow_fajr > now:
            return Prayer.FAJR
        return None

    def next_prayer(self, now: datetime | None = None) -> datetime | None:
        now = self._resolve(now)
        prayer = self.next_prayer_name(now)
        if prayer is None:
            return None
        if prayer is Prayer.FAJR and self.isha < now:
            return self.tomorrow_fajr
        return self.get(prayer)

    def time_remaining(self, now: datetime | None = None) -> timedelta | None:
        now = self._resolve(now)
        upcoming = self.next_prayer(now)
        if upcoming is None:
            return None
        return upcoming - now

    def current_prayer_name(self, now: datetime | None = None) -> Prayer | None:
        """
        Prayer whose period contains `now`. The Isha period runs until
        tomorrow's Fajr; before today's Fajr there is no current prayer.
        """
        now = self._resolve(now)
        for current, upcoming in zip(ORDER, ORDER[1:]):
            if self.get(current) < now < self.get(upcoming):
                return current
        if self.isha < now < self.tomorrow_fajr:
            return Prayer.ISHA
        return None
