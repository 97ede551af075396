from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta

from .errors import OutOfRangeError

FULL_TURN = 360
DEFAULT_PRECISION = 0.001

@dataclass(frozen=True)
class Tithi:
    """A tithi boundary: the instant the separation angle reaches ``angle``.

    ``angle`` is direction-adjusted to [0,360): waning crossings are
    reflected into [180,360) so that ``index == angle // step + 1``.
    """
    index: int
    timestamp: datetime
    angle: int

    @property
    def waxing(self) -> bool:
        return self.angle < FULL_TURN // 2

@dataclass(frozen=True)
class SearchConfig:
    """Tunable constants of the search engines."""
    angular_step: int = 12
    time_resolution: timedelta = timedelta(minutes=1)
    direction_window: timedelta = timedelta(hours=1)
    reversal_guard: timedelta = timedelta(hours=12)
    fold_resolution: timedelta = timedelta(seconds=1)
    max_iterations: int = 64

    @property
    def tithi_count(self) -> int:
        return FULL_TURN // self.angular_step

    def validate(self) -> "SearchConfig":
        if self.angular_step <= 0 or FULL_TURN % self.angular_step != 0:
            raise OutOfRangeError(f"angular_step must be a positive divisor of 360, got {self.angular_step}")
        for name in ("time_resolution", "direction_window", "reversal_guard", "fold_resolution"):
            if getattr(self, name) <= timedelta(0):
                raise OutOfRangeError(f"{name} must be > 0")
        if self.max_iterations <= 0:
            raise OutOfRangeError("max_iterations must be > 0")
        return self

DEFAULT_CONFIG = SearchConfig()
