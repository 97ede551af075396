# tests/conftest.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest


@dataclass(frozen=True)
class LinearElongation:
    """
    Synthetic oracle: elongation grows at a constant rate and is 0 (new moon)
    at ``epoch``. Folds happen every 180/rate days, exactly at 0 and 180.
    """
    epoch: datetime
    rate: float = 12.2  # deg/day

    def elongation(self, t: datetime) -> float:
        days = (t - self.epoch).total_seconds() / 86400.0
        return (self.rate * days) % 360.0

    def angle(self, t: datetime) -> float:
        e = self.elongation(t)
        return 360.0 - e if e > 180.0 else e

    def at(self, elong_deg: float) -> datetime:
        """First instant at or after epoch with the given elongation."""
        return self.epoch + timedelta(days=elong_deg / self.rate)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def linear():
    # new moon at 2024-03-01 05:00 UTC
    return LinearElongation(epoch=utc(2024, 3, 1, 5, 0, 0))
