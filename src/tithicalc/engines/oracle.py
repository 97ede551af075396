from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..reference import astro_args as aa
from ..reference import lunar, solar
from ..reference import time_scales as ts


@dataclass(frozen=True)
class ReferenceOracle:
    """
    Moon–Sun separation from the built-in analytical series
    (truncated ELP2000 Moon, three-term Sun, Espenak–Meeus ΔT).

    apparent=False uses true longitudes (no aberration or nutation).
    """
    apparent: bool = True

    def elongation(self, instant: datetime) -> float:
        """Signed elongation λ_moon - λ_sun wrapped to [0,360)."""
        jd_tt = ts.datetime_utc_to_jd_tt(instant)
        moon = lunar.lunar_longitude(jd_tt)
        sun = solar.solar_longitude(jd_tt)
        if self.apparent:
            return aa.wrap_deg(moon.L_app_deg - sun.L_app_deg)
        return aa.wrap_deg(moon.L_true_deg - sun.L_true_deg)

    def angle(self, instant: datetime) -> float:
        return aa.fold180(self.elongation(instant))
