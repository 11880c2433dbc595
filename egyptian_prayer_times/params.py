"""Validated, immutable inputs for the prayer calculator."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InvalidArgumentError(ValueError):
    """Raised when calculation parameters are out of range."""


class AsrMethod(Enum):
    """Juristic method for Asr; the value is the shadow-length factor's key."""

    STANDARD = "standard"
    SHAFI = "shafi"
    HANAFI = "hanafi"

    @property
    def shadow_factor(self) -> float:
        # Shafi is numerically identical to Standard
        return 2.0 if self is AsrMethod.HANAFI else 1.0

    @classmethod
    def parse(cls, name: str) -> "AsrMethod":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidArgumentError(
                f"Unknown Asr method {name!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class CalculationParams:
    latitude: float  # degrees, -90..90
    longitude: float  # degrees, -180..180
    timezone: float = 0.0  # hours east of UTC
    asr_method: AsrMethod = AsrMethod.STANDARD

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise InvalidArgumentError(
                f"Latitude must be between -90 and 90 degrees, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise InvalidArgumentError(
                f"Longitude must be between -180 and 180 degrees, got {self.longitude}"
            )

    @classmethod
    def with_local_timezone(
        cls,
        latitude: float,
        longitude: float,
        asr_method: AsrMethod = AsrMethod.STANDARD,
        now: datetime | None = None,
    ) -> "CalculationParams":
        """
        Parameters using the host's current UTC offset, sampled once.
        The offset is taken in whole hours (truncated toward zero), so later
        daylight-saving changes are not followed.
        """
        now = now or datetime.now().astimezone()
        offset = now.utcoffset()
        hours = int(offset.total_seconds() / 3600) if offset is not None else 0
        return cls(
            latitude=latitude,
            longitude=longitude,
            timezone=float(hours),
            asr_method=asr_method,
        )
