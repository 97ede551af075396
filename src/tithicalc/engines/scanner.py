"""
tithicalc.engines.scanner
-------------------------
Day and range scans over an angle oracle.

A civil day is classified by three direction probes (whole day, first and
last ``time_resolution``). When they agree the separation is monotonic all
day and at most two boundaries are crossed; otherwise the day holds a turn
of the separation at 0 or 180 (new or full moon), which is itself a tithi
boundary, with at most one further boundary on either side outside the
``reversal_guard`` window.

Crossings within the search tolerance of midnight may be reported by both
adjacent days; the range scan drops a result whose index equals the
previous one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import AbstractSet, Iterable, Iterator, List, Optional, Tuple

from ..core.errors import OutOfRangeError
from ..core.time import Instant, as_utc, day_bounds, iter_days
from ..core.types import DEFAULT_CONFIG, DEFAULT_PRECISION, SearchConfig, Tithi
from ._crossing import scan_crossings
from ._extrema import locate_reversal
from ._probe import direction, index_and_angle
from .interfaces import AngleOracle

log = logging.getLogger(__name__)


def _check_precision(precision: float) -> None:
    if not precision > 0:
        raise OutOfRangeError(f"precision must be > 0, got {precision}")


@dataclass(frozen=True)
class TithiScanner:
    oracle: AngleOracle
    config: SearchConfig = DEFAULT_CONFIG

    def __post_init__(self) -> None:
        self.config.validate()

    # ---------------------------------------------------------
    # Point queries
    # ---------------------------------------------------------
    def angle(self, instant: Instant) -> float:
        return self.oracle.angle(as_utc(instant))

    def tithi_at(self, instant: Instant) -> Tuple[int, int]:
        """(index, direction-adjusted angle) for a boundary instant."""
        return index_and_angle(self.oracle, as_utc(instant), self.config)

    # ---------------------------------------------------------
    # Day scan
    # ---------------------------------------------------------
    def find_by_day(self, day: Instant, precision: float = DEFAULT_PRECISION) -> List[datetime]:
        """
        Boundary instants found in the civil day containing ``day``, in order.

        May repeat a boundary also found by the neighbouring day when it lies
        within the tolerance of midnight.
        """
        _check_precision(precision)
        o, cfg = self.oracle, self.config
        res, guard = cfg.time_resolution, cfg.reversal_guard
        day_start, day_end = day_bounds(day)

        day_dir = direction(o, day_start, day_end)
        start_dir = direction(o, day_start, day_start + res)
        end_dir = direction(o, day_end - res, day_end)
        kw = dict(precision=precision, config=cfg)

        if day_dir == start_dir == end_dir:
            found = scan_crossings(o, day_start, day_end, direction=day_dir, **kw)
            log.debug("%s: monotonic (%+d), %d crossing(s)", day_start.date(), day_dir, len(found))
            return self._with_midnight_folds(day_start, day_end, start_dir, end_dir, found, precision)

        extremum = locate_reversal(o, day_start, day_end, reverse=start_dir > 0, **kw)
        log.debug("%s: reversal at %s", day_start.date(), extremum.isoformat())

        found = []
        if extremum - day_start > guard:
            found.extend(scan_crossings(o, day_start, extremum - guard, direction=start_dir, **kw))
        found.append(extremum)
        if day_end - extremum > guard:
            found.extend(scan_crossings(o, extremum + guard, day_end, direction=end_dir, **kw))
        return found

    def _with_midnight_folds(
        self,
        day_start: datetime,
        day_end: datetime,
        start_dir: int,
        end_dir: int,
        found: List[datetime],
        precision: float,
    ) -> List[datetime]:
        """
        Add a 0/180 turn lying within one ``time_resolution`` of either end of
        the day. Such a turn can hide inside the first or last probe and leave
        all three day probes in agreement.
        """
        o, cfg = self.oracle, self.config
        res = cfg.time_resolution
        fine = replace(cfg, time_resolution=cfg.fold_resolution)

        before_dir = direction(o, day_start - res, day_start)
        if before_dir != start_dir:
            fold = locate_reversal(o, day_start - res, day_start + res, reverse=before_dir > 0, precision=precision, config=fine)
            log.debug("%s: turn next to day start at %s", day_start.date(), fold.isoformat())
            if not found or abs(found[0] - fold) >= res:
                found.insert(0, fold)

        after_dir = direction(o, day_end, day_end + res)
        if after_dir != end_dir:
            fold = locate_reversal(o, day_end - res, day_end + res, reverse=end_dir > 0, precision=precision, config=fine)
            log.debug("%s: turn next to day end at %s", day_start.date(), fold.isoformat())
            if not found or abs(found[-1] - fold) >= res:
                found.append(fold)

        return found

    # ---------------------------------------------------------
    # Range scan
    # ---------------------------------------------------------
    def iter_in_range(
        self,
        start: Instant,
        end: Instant,
        index_filter: Optional[Iterable[int]] = None,
        precision: float = DEFAULT_PRECISION,
    ) -> Iterator[Tithi]:
        """
        Tithi beginning on the civil days from start's date to end's date.

        Arguments are checked here, before the first oracle call; the scan
        itself runs lazily.
        """
        start, end = as_utc(start), as_utc(end)
        if start >= end:
            raise OutOfRangeError(f"start must be lower than end ({start.isoformat()} >= {end.isoformat()})")
        _check_precision(precision)

        wanted: Optional[AbstractSet[int]] = None
        if index_filter is not None:
            wanted = frozenset(int(i) for i in index_filter)
            bad = sorted(i for i in wanted if not 1 <= i <= self.config.tithi_count)
            if bad:
                raise OutOfRangeError(f"index_filter values must be in 1..{self.config.tithi_count}, got {bad}")

        return self._scan(start, end, wanted, precision)

    def _scan(self, start: datetime, end: datetime, wanted: Optional[AbstractSet[int]], precision: float) -> Iterator[Tithi]:
        previous = 0
        for day in iter_days(start, end):
            for instant in self.find_by_day(day, precision):
                index, angle = index_and_angle(self.oracle, instant, self.config)
                if index == previous:
                    # same boundary rediscovered across midnight
                    log.debug("dropping repeated tithi %d at %s", index, instant.isoformat())
                    continue
                previous = index
                if wanted is None or index in wanted:
                    yield Tithi(index=index, timestamp=instant, angle=angle)

    def find_in_range(
        self,
        start: Instant,
        end: Instant,
        index_filter: Optional[Iterable[int]] = None,
        precision: float = DEFAULT_PRECISION,
    ) -> List[Tithi]:
        return list(self.iter_in_range(start, end, index_filter, precision))
