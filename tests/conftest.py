from datetime import date

import pytest

from egyptian_prayer_times import AsrMethod, CalculationParams, calculate

CAIRO = dict(latitude=30.0444, longitude=31.2357, timezone=2.0)


@pytest.fixture
def cairo():
    return CalculationParams(**CAIRO, asr_method=AsrMethod.STANDARD)


@pytest.fixture
def cairo_times(cairo):
    return calculate(date(2025, 12, 15), cairo)
