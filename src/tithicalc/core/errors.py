class TithiCalcError(Exception):
    """Base error."""

class OutOfRangeError(TithiCalcError, ValueError):
    """Raised when an argument (range, precision, config value) is out of range."""

class ConvergenceError(TithiCalcError, RuntimeError):
    """Raised when a bisection exceeds its iteration cap."""

class EphemerisUnavailableError(TithiCalcError):
    """Raised when an optional ephemeris backend (e.g. DE422) is not available."""
