from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from .core.time import Instant
from .core.types import DEFAULT_CONFIG, DEFAULT_PRECISION, SearchConfig, Tithi
from .engines.interfaces import AngleOracle, OracleFactory, OracleRegistry
from .engines.scanner import TithiScanner

_registry: Optional[OracleRegistry] = None

def set_registry(reg: OracleRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> OracleRegistry:
    if _registry is None:
        raise RuntimeError("Ephemeris registry not initialized")
    return _registry

def list_ephemerides() -> List[str]:
    return _reg().list()

def register_ephemeris(name: str, oracle: AngleOracle | OracleFactory, *, overwrite: bool = False) -> None:
    _reg().register(name, oracle, overwrite=overwrite)

def get_oracle(name: str = "reference") -> AngleOracle:
    return _reg().get(name)

def make_scanner(*, ephemeris: str = "reference", config: Optional[SearchConfig] = None) -> TithiScanner:
    return TithiScanner(oracle=get_oracle(ephemeris), config=config or DEFAULT_CONFIG)

# ============================================================
# Tithi search
# ============================================================

def find_tithi_in_range(
    start: Instant,
    end: Instant,
    index_filter: Optional[Iterable[int]] = None,
    precision: float = DEFAULT_PRECISION,
    *,
    ephemeris: str = "reference",
    config: Optional[SearchConfig] = None,
) -> List[Tithi]:
    """
    Tithi beginning on every civil (UTC) day from start's date to end's date.

    index_filter keeps only the listed indices (1..30 with the default step);
    precision is the angular tolerance in degrees of each boundary instant.
    Raises OutOfRangeError when start >= end or precision <= 0.
    """
    scanner = make_scanner(ephemeris=ephemeris, config=config)
    return scanner.find_in_range(start, end, index_filter, precision)

def find_tithi_by_day(
    day: Instant,
    precision: float = DEFAULT_PRECISION,
    *,
    ephemeris: str = "reference",
    config: Optional[SearchConfig] = None,
) -> List[datetime]:
    """Boundary instants found in one civil day; may overlap the next day near midnight."""
    return make_scanner(ephemeris=ephemeris, config=config).find_by_day(day, precision)

def angle_between(instant: Instant, *, ephemeris: str = "reference") -> float:
    """Moon–Sun separation in degrees, in [0,180]."""
    return make_scanner(ephemeris=ephemeris).angle(instant)

def tithi_at(
    instant: Instant,
    *,
    ephemeris: str = "reference",
    config: Optional[SearchConfig] = None,
) -> Tuple[int, int]:
    return make_scanner(ephemeris=ephemeris, config=config).tithi_at(instant)
