from __future__ import annotations

from datetime import datetime, timezone

from .deltat import decimal_year, delta_t_seconds


_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECONDS_PER_DAY = 86400.0


def datetime_utc_to_jd(dt: datetime) -> float:
    """
    datetime -> JD (UTC). Requires timezone-aware datetime.
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    # timedelta arithmetic instead of timestamp(): valid before 1970 on every platform
    t = (dt - _UNIX_EPOCH).total_seconds()
    return _JD_UNIX_EPOCH + t / _SECONDS_PER_DAY


def datetime_utc_to_jd_tt(dt: datetime) -> float:
    """
    JD(TT) of a UTC instant, TT = UTC + ΔT.

    UT1-UTC is taken as 0; it never exceeds 0.9 s.
    """
    jd_utc = datetime_utc_to_jd(dt)
    dT = delta_t_seconds(decimal_year(dt.astimezone(timezone.utc)))
    return jd_utc + dT / _SECONDS_PER_DAY
