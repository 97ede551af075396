from __future__ import annotations

from dataclasses import dataclass
from math import fmod


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def frac01(x: float) -> float:
    """Return fractional part in [0,1)."""
    return x - float(int(x // 1))

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
        # tiny negatives round up to exactly 360
        if y >= 360.0:
            y = 0.0
    return y

def fold180(x_deg: float) -> float:
    """Absolute angular distance in [0,180] for any signed difference of longitudes."""
    y = wrap_deg(x_deg)
    return 360.0 - y if y > 180.0 else y

def deg_to_turn(deg: float) -> float:
    return deg / 360.0

def turn_to_deg(turn: float) -> float:
    return 360.0 * turn

# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


# ------------------------------------------------------------
# Fundamental arguments (Meeus / ELP2000-style)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Fundamental arguments in turns, wrapped to [0,1)."""
    Lp_turn: float
    D_turn: float
    M_turn: float
    Mp_turn: float
    F_turn: float
    Omega_turn: float

    @property
    def Lp_deg(self) -> float: return turn_to_deg(self.Lp_turn)
    @property
    def D_deg(self) -> float: return turn_to_deg(self.D_turn)
    @property
    def M_deg(self) -> float: return turn_to_deg(self.M_turn)
    @property
    def Mp_deg(self) -> float: return turn_to_deg(self.Mp_turn)
    @property
    def F_deg(self) -> float: return turn_to_deg(self.F_turn)
    @property
    def Omega_deg(self) -> float: return turn_to_deg(self.Omega_turn)


def _turns(deg: float) -> float:
    return frac01(deg_to_turn(deg))


def fundamental_args(T: float) -> FundamentalArgs:
    """
    Mean lunar elements at T Julian centuries (TT) from J2000.0:

      L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000
      D  = 297.8501921 + 445267.1114034  T - 0.0018819 T^2 + T^3/545868  - T^4/113065000
      M  = 357.5291092 + 35999.0502909  T - 0.0001536 T^2 + T^3/24490000
      M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699   - T^4/14712000
      F  = 93.2720950  + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000
      Ω  = 125.04452   - 1934.136261    T + 0.0020708 T^2 + T^3/450000
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    Omega = 125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0

    return FundamentalArgs(
        Lp_turn=_turns(Lp),
        D_turn=_turns(D),
        M_turn=_turns(M),
        Mp_turn=_turns(Mp),
        F_turn=_turns(F),
        Omega_turn=_turns(Omega),
    )


# ------------------------------------------------------------
# Sun mean elements (Meeus-style)
# ------------------------------------------------------------

@dataclass(frozen=True)
class SolarMean:
    L0_turn: float  # mean longitude of Sun
    M_turn: float   # mean anomaly of Sun

    @property
    def L0_deg(self) -> float: return turn_to_deg(self.L0_turn)
    @property
    def M_deg(self) -> float: return turn_to_deg(self.M_turn)


def solar_mean_elements(T: float) -> SolarMean:
    """Geometric mean longitude L0 and mean anomaly M of the Sun."""
    T2 = T * T
    L0 = 280.46646 + 36000.76983 * T + 0.0003032 * T2
    M = 357.52911 + 35999.05029 * T - 0.0001537 * T2
    return SolarMean(L0_turn=_turns(L0), M_turn=_turns(M))


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E of the Earth's orbit; scales lunar terms
    that depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)
