"""
tithicalc.engines.interfaces
----------------------------
Boundary between the search engines and whatever computes the Moon–Sun
separation.

The engines only ever ask one question of an ephemeris: the absolute angle
between the two bodies' ecliptic longitudes at a UTC instant, folded into
[0,180]. The answer must be a pure function of the instant; every bisection
assumes repeated calls with equal input return equal output.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Protocol, Union


class AngleOracle(Protocol):
    def angle(self, instant: datetime) -> float:
        """Separation angle in degrees, in [0,180], at a timezone-aware UTC instant."""
        ...


OracleFactory = Callable[[], AngleOracle]


@dataclass(frozen=True)
class FunctionOracle:
    """Plain ``angle(instant)`` callable in the AngleOracle shape."""
    fn: Callable[[datetime], float]

    def angle(self, instant: datetime) -> float:
        return float(self.fn(instant))


def _takes_instant(fn: Callable) -> bool:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return any(p.kind in positional and p.default is p.empty for p in params)


@dataclass
class OracleRegistry:
    """
    Named oracles. Entries may be registered as ready instances or as
    zero-argument factories that are resolved on first use (optional
    backends load heavy data files only when asked for). A callable that
    takes the instant is registered as a FunctionOracle.
    """
    _oracles: Dict[str, Union[AngleOracle, OracleFactory]] = field(default_factory=dict)

    def get(self, name: str) -> AngleOracle:
        if name not in self._oracles:
            raise KeyError(f"Unknown ephemeris '{name}'. Available: {sorted(self._oracles)}")
        entry = self._oracles[name]
        if not hasattr(entry, "angle"):
            entry = entry()
            if not hasattr(entry, "angle"):
                raise TypeError(f"Factory for ephemeris '{name}' returned {type(entry).__name__}, not an oracle")
            self._oracles[name] = entry
        return entry

    def list(self) -> List[str]:
        return sorted(self._oracles.keys())

    def register(self, name: str, oracle: Union[AngleOracle, OracleFactory], *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._oracles):
            raise KeyError(f"Ephemeris '{name}' already exists. Use overwrite=True to replace.")
        if not hasattr(oracle, "angle"):
            if not callable(oracle):
                raise TypeError(f"Ephemeris '{name}' must have an angle() method or be callable")
            if _takes_instant(oracle):
                oracle = FunctionOracle(oracle)
        self._oracles[name] = oracle
