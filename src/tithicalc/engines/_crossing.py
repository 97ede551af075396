from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..core.errors import ConvergenceError
from ..core.time import midpoint
from ..core.types import SearchConfig
from ._probe import near_boundary, normalized
from .interfaces import AngleOracle

log = logging.getLogger(__name__)


def locate_crossing(
    oracle: AngleOracle,
    start: datetime,
    end: datetime,
    *,
    reverse: bool,
    precision: float,
    config: SearchConfig,
) -> datetime:
    """
    Bisection for the instant the normalized angle wraps through a cell boundary.

    Requires the normalized angle to rise across [start, end] except for the
    single wrap. Precision is angular (degrees), not temporal. Endpoints that
    already sit on a boundary win over further bisection, start first. A
    precision finer than the motion over one microsecond ends at that floor.
    """
    step = config.angular_step

    start_angle = normalized(oracle, start, reverse, step)
    if near_boundary(start_angle, precision, step):
        return start
    if near_boundary(normalized(oracle, end, reverse, step), precision, step):
        return end

    mid = midpoint(start, end)
    mid_angle = normalized(oracle, mid, reverse, step)
    for n in range(config.max_iterations):
        # datetime stops halving at one microsecond
        if near_boundary(mid_angle, precision, step) or mid == start or mid == end:
            log.debug("crossing at %s after %d steps", mid.isoformat(), n)
            return mid
        # no wrap yet between start and mid: the boundary is further on
        if mid_angle > start_angle:
            start, start_angle = mid, mid_angle
        else:
            end = mid
        mid = midpoint(start, end)
        mid_angle = normalized(oracle, mid, reverse, step)

    raise ConvergenceError(
        f"crossing search did not reach precision {precision} within "
        f"{config.max_iterations} steps (last interval {start.isoformat()}..{end.isoformat()})"
    )


def try_locate_crossing(
    oracle: AngleOracle,
    start: datetime,
    end: datetime,
    *,
    reverse: bool,
    precision: float,
    config: SearchConfig,
) -> Optional[datetime]:
    """
    Crossing inside [start, end], or None when the interval has no wrap.

    The midpoint decides: below both endpoints means the wrap happened in the
    first half, above both means it happens in the second half, anything else
    is a plain rise without a boundary.
    """
    step = config.angular_step
    start_angle = normalized(oracle, start, reverse, step)
    end_angle = normalized(oracle, end, reverse, step)

    if near_boundary(start_angle, precision, step):
        return start
    if near_boundary(end_angle, precision, step):
        return end

    mid = midpoint(start, end)
    mid_angle = normalized(oracle, mid, reverse, step)
    kw = dict(reverse=reverse, precision=precision, config=config)

    if mid_angle < start_angle and mid_angle < end_angle:
        return locate_crossing(oracle, start, mid, **kw)
    if mid_angle > start_angle and mid_angle > end_angle:
        return locate_crossing(oracle, mid, end, **kw)
    return None


def scan_crossings(
    oracle: AngleOracle,
    start: datetime,
    end: datetime,
    *,
    direction: int,
    precision: float,
    config: SearchConfig,
) -> List[datetime]:
    """
    Crossings (0, 1 or 2) in a window where the separation keeps one direction.

    The window is tried half by half. After a hit in the first half the next
    boundary cannot be closer than ``reversal_guard``, so the second search
    starts there instead of at the midpoint.
    """
    out: List[datetime] = []
    if start >= end:
        return out

    kw = dict(reverse=direction < 0, precision=precision, config=config)
    mid = midpoint(start, end)

    first = try_locate_crossing(oracle, start, mid, **kw)
    if first is not None:
        out.append(first)
        resume = first + config.reversal_guard
        second = try_locate_crossing(oracle, resume, end, **kw) if resume < end else None
    else:
        second = try_locate_crossing(oracle, mid, end, **kw)

    if second is not None:
        out.append(second)
    return out
