from __future__ import annotations

import logging
from datetime import datetime

from ..core.errors import ConvergenceError
from ..core.time import midpoint
from ..core.types import SearchConfig
from ._probe import near_boundary, normalized
from .interfaces import AngleOracle

log = logging.getLogger(__name__)


def locate_reversal(
    oracle: AngleOracle,
    start: datetime,
    end: datetime,
    *,
    reverse: bool,
    precision: float,
    config: SearchConfig,
) -> datetime:
    """
    Approximate instant where the separation turns around inside [start, end].

    ``reverse`` must match the direction before the turn, which makes the
    normalized angle fall into the turn and rise after it. Each step probes one
    ``time_resolution`` ahead of the midpoint: a rising probe means the turn is
    already behind. Stops at the resolution floor, or earlier once the
    midpoint sits within ``precision`` of a cell boundary (the separation turns
    at 0 and 180, both boundaries).
    """
    step = config.angular_step
    res = config.time_resolution

    # endpoints are not candidates: a day edge sitting on a boundary is a
    # crossing, not the turn
    mid = midpoint(start, end)
    mid_angle = normalized(oracle, mid, reverse, step)
    for n in range(config.max_iterations):
        if near_boundary(mid_angle, precision, step) or end - mid < res:
            log.debug("reversal at %s after %d steps", mid.isoformat(), n)
            return mid
        ahead = normalized(oracle, mid + res, reverse, step)
        if ahead > mid_angle:
            end = mid
        else:
            start = mid
        mid = midpoint(start, end)
        mid_angle = normalized(oracle, mid, reverse, step)

    raise ConvergenceError(
        f"reversal search did not settle within {config.max_iterations} steps "
        f"(last interval {start.isoformat()}..{end.isoformat()})"
    )
