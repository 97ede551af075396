#ephemeris/de422.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from ..core.errors import EphemerisUnavailableError
from ..reference import astro_args as aa
from ..reference import time_scales as ts
from . import require_ephemeris

EPS_J2000_DEG = 23.439291111
EMRAT_DEFAULT = 81.30056907419062


def _rot_x_minus_eps(v):
    eps = math.radians(EPS_J2000_DEG)
    x, y, z = float(v[0]), float(v[1]), float(v[2])
    y2 = math.cos(eps) * y + math.sin(eps) * z
    z2 = -math.sin(eps) * y + math.cos(eps) * z
    return (x, y2, z2)


def _lon_ecl_deg(v_eq) -> float:
    x, y, _ = _rot_x_minus_eps(v_eq)
    return math.degrees(math.atan2(y, x)) % 360.0


def _load_emrat(de422_mod) -> float:
    """Earth/Moon mass ratio from the constants shipped with the de422 package."""
    import pathlib
    import numpy as np

    p = pathlib.Path(de422_mod.__file__).resolve().parent / "constants.npy"
    if not p.exists():
        return EMRAT_DEFAULT
    constants = np.load(str(p), allow_pickle=True).item()
    for k in ("EMRAT", "emrat"):
        if k in constants:
            return float(constants[k])
    return EMRAT_DEFAULT


@dataclass
class DE422Oracle:
    """
    Moon–Sun separation from JPL DE422 (geocentric, J2000 ecliptic).

    Requires optional deps:
      pip install "tithicalc[ephemeris]"
    """
    eph: object
    emrat: float

    @classmethod
    def load(cls) -> "DE422Oracle":
        require_ephemeris()
        try:
            import de422  # type: ignore
            from jplephem import Ephemeris  # type: ignore
        except ImportError as e:
            raise EphemerisUnavailableError(
                "DE422 ephemeris not available. Install extras:\n"
                "  pip install \"tithicalc[ephemeris]\""
            ) from e
        return cls(eph=Ephemeris(de422), emrat=_load_emrat(de422))

    def elongation_jd(self, jd_tt: float) -> float:
        """Elongation λ_moon - λ_sun in degrees [0,360) at JD(TT)."""
        r_emb = self.eph.compute("earthmoon", jd_tt)[:3]
        r_em = self.eph.compute("moon", jd_tt)[:3]      # geocentric moon
        r_sun = self.eph.compute("sun", jd_tt)[:3]      # barycentric sun

        # Earth from EMB and the geocentric Moon vector
        r_earth = r_emb - r_em / (self.emrat + 1.0)

        lon_s = _lon_ecl_deg(r_sun - r_earth)
        lon_m = _lon_ecl_deg(r_em)
        return (lon_m - lon_s) % 360.0

    def angle(self, instant: datetime) -> float:
        return aa.fold180(self.elongation_jd(ts.datetime_utc_to_jd_tt(instant)))
