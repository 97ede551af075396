"""Ephemeris adapters/providers (optional).

Thin wrappers around external ephemeris libraries exposing the AngleOracle
interface. Install with:
  pip install "tithicalc[ephemeris]"
"""

from ..core.errors import EphemerisUnavailableError


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import numpy  # noqa: F401
    except ImportError as e:
        raise EphemerisUnavailableError('Ephemeris support requires: pip install "tithicalc[ephemeris]"') from e
