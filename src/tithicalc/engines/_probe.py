from __future__ import annotations

import math
from datetime import datetime
from typing import Tuple

from ..core.types import FULL_TURN, SearchConfig
from .interfaces import AngleOracle

HALF_TURN = FULL_TURN // 2


def direction(oracle: AngleOracle, start: datetime, end: datetime) -> int:
    """
    +1 if the separation moves from 0 toward 180 between start and end, else -1.

    Compares cosines rather than raw angles: the oracle reports |Δλ| folded
    into [0,180], and across a fold the raw values alone are ambiguous.
    """
    c0 = math.cos(math.radians(oracle.angle(start)))
    c1 = math.cos(math.radians(oracle.angle(end)))
    return 1 if c0 - c1 >= 0 else -1


def fold(angle: float, step: int) -> float:
    """angle folded into [0, step)."""
    return angle - math.floor(angle / step) * step


def normalized(oracle: AngleOracle, instant: datetime, reverse: bool, step: int) -> float:
    """
    Separation folded into one cell, flipped when the angle decreases, so that
    within a cell the value always grows toward ``step`` and wraps to 0 at a
    boundary.
    """
    folded = fold(oracle.angle(instant), step)
    return step - folded if reverse else folded


def near_boundary(value: float, precision: float, step: int) -> bool:
    return value <= precision or value >= step - precision


def index_and_angle(oracle: AngleOracle, instant: datetime, config: SearchConfig) -> Tuple[int, int]:
    """
    Tithi index and direction-adjusted integer angle at a boundary instant.

    A decreasing separation (waning half) is reflected into [180,360).
    """
    angle = int(round(oracle.angle(instant)))
    if direction(oracle, instant, instant + config.direction_window) < 0:
        angle = HALF_TURN + (HALF_TURN - angle)
    if angle == FULL_TURN:
        angle = 0
    return angle // config.angular_step + 1, angle
