"""tithicalc public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    find_tithi_in_range,
    find_tithi_by_day,
    angle_between,
    tithi_at,
    list_ephemerides,
    register_ephemeris,
    get_oracle,
    make_scanner,
)
from .core.errors import (
    TithiCalcError,
    OutOfRangeError,
    ConvergenceError,
    EphemerisUnavailableError,
)
from .core.types import SearchConfig, Tithi

__all__ = [
    "find_tithi_in_range",
    "find_tithi_by_day",
    "angle_between",
    "tithi_at",
    "list_ephemerides",
    "register_ephemeris",
    "get_oracle",
    "make_scanner",
    "TithiCalcError",
    "OutOfRangeError",
    "ConvergenceError",
    "EphemerisUnavailableError",
    "SearchConfig",
    "Tithi",
]
