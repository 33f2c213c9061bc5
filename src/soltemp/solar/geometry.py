"""Solar geometry: top-of-atmosphere horizontal irradiance.

Pure functions computing the calendar-day index, equation of time, solar
declination, Earth-Sun eccentricity correction and the instantaneous TOA
horizontal irradiance for a given UTC time and location.

The declination and equation of time are low-order approximations
(Cooper declination, three-term EoT fit). They are adequate for removing the
diurnal/seasonal loading artifact from temperature records, not for
ephemeris work.

All angles in the public API are degrees unless the name says ``_rad``.
Longitude is positive east.
"""

import logging
import math
from functools import lru_cache

import numpy as np

from soltemp.errors import InvalidDate, InvalidInput

__all__ = [
    'SOLAR_CONSTANT_WM2',
    'is_leap_year',
    'days_in_year',
    'day_of_year',
    'day_of_year_array',
    'equation_of_time_minutes',
    'solar_declination_rad',
    'eccentricity_correction',
    'cos_zenith',
    'toa_horizontal_irradiance',
    'mean_toa_horizontal_irradiance_same_hour',
    'fractional_year',
]

logger = logging.getLogger(__name__)

SOLAR_CONSTANT_WM2 = 1367.0
DEG2RAD = math.pi / 180.0

# Days elapsed before the first of each month in a common year
CUMULATIVE_DAYS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_CUMULATIVE_DAYS_ARR = np.array(CUMULATIVE_DAYS, dtype=np.int64)
_DAYS_IN_MONTH_ARR = np.array(DAYS_IN_MONTH, dtype=np.int64)


# ============================================================================
# CALENDAR
# ============================================================================

def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the 1-based day-of-year index J.
    
    Parameters
    ----------
    year, month, day : int
        Gregorian calendar date.
    
    Returns
    -------
    int
        1..365, or 1..366 in leap years.
    
    Raises
    ------
    InvalidDate
        If month is not 1..12 or day does not exist in that month.
    
    Examples
    --------
    >>> day_of_year(1958, 6, 21)
    172
    >>> day_of_year(2000, 12, 31)
    366
    """
    if not 1 <= month <= 12:
        raise InvalidDate(f"month must be 1..12, got {month}")
    max_day = DAYS_IN_MONTH[month - 1]
    if month == 2 and is_leap_year(year):
        max_day = 29
    if not 1 <= day <= max_day:
        raise InvalidDate(f"day {day} out of range for {year:04d}-{month:02d}")

    J = CUMULATIVE_DAYS[month - 1] + day
    if month > 2 and is_leap_year(year):
        J += 1
    return J


def day_of_year_array(years, months, days) -> np.ndarray:
    """Vectorized :func:`day_of_year` over whole columns.
    
    Calendar-impossible entries yield -1 instead of raising, so callers can
    mask them out of whole-table computations.
    """
    years = np.asarray(years, dtype=np.int64)
    months = np.asarray(months, dtype=np.int64)
    days = np.asarray(days, dtype=np.int64)

    leap = (years % 400 == 0) | ((years % 4 == 0) & (years % 100 != 0))
    valid_month = (months >= 1) & (months <= 12)
    month_idx = np.where(valid_month, months - 1, 0)

    max_day = _DAYS_IN_MONTH_ARR[month_idx] + ((months == 2) & leap)
    valid = valid_month & (days >= 1) & (days <= max_day)

    J = _CUMULATIVE_DAYS_ARR[month_idx] + days + ((months > 2) & leap)
    return np.where(valid, J, -1)


def fractional_year(year, month, day=None):
    """Decimal year: ``year + (month-1)/12``, plus ``(day-1)/365`` when day is given.
    
    Works on scalars and numpy/pandas columns alike.
    """
    value = year + (month - 1) / 12.0
    if day is not None:
        value = value + (day - 1) / 365.0
    return value


# ============================================================================
# ASTRONOMY
# ============================================================================

def equation_of_time_minutes(J: int) -> float:
    """Apparent minus mean solar time, in minutes, for day-of-year J."""
    B = 2.0 * math.pi * (J - 81) / 364.0
    return 9.87 * math.sin(2.0 * B) - 7.53 * math.cos(B) - 1.5 * math.sin(B)


def solar_declination_rad(J: int) -> float:
    return 23.45 * DEG2RAD * math.sin(2.0 * math.pi * (284.0 + J) / 365.0)


def eccentricity_correction(J: int) -> float:
    """Earth-Sun distance factor E0 applied to the solar constant."""
    return 1.0 + 0.033 * math.cos(2.0 * math.pi * J / 365.0)


def cos_zenith(lat_rad: float, decl_rad: float, hour_angle_rad: float) -> float:
    return (math.sin(lat_rad) * math.sin(decl_rad)
            + math.cos(lat_rad) * math.cos(decl_rad) * math.cos(hour_angle_rad))


def _validate_location(hour_utc: float, lon_deg: float, lat_deg: float) -> None:
    if not 0.0 <= hour_utc < 24.0:
        raise InvalidInput(f"hour_utc must be in [0, 24), got {hour_utc}")
    if not -90.0 <= lat_deg <= 90.0:
        raise InvalidInput(f"latitude must be in [-90, 90] degrees, got {lat_deg}")
    if not -180.0 <= lon_deg <= 180.0:
        raise InvalidInput(f"longitude must be in [-180, 180] degrees, got {lon_deg}")


def _irradiance_for_day(J: int, hour_utc: float, lon_deg: float, lat_deg: float) -> float:
    """TOA horizontal irradiance for day-of-year J; shared by instant and mean."""
    eot = equation_of_time_minutes(J)
    # 4 minutes of solar time per degree of longitude
    lst = hour_utc + (lon_deg * 4.0 + eot) / 60.0
    hour_angle = 15.0 * (lst - 12.0) * DEG2RAD

    mu0 = cos_zenith(lat_deg * DEG2RAD, solar_declination_rad(J), hour_angle)
    if not mu0 > 0.0:
        return 0.0
    return SOLAR_CONSTANT_WM2 * eccentricity_correction(J) * mu0


def toa_horizontal_irradiance(year: int, month: int, day: int, hour_utc: float,
                              lon_deg: float, lat_deg: float) -> float:
    """Instantaneous top-of-atmosphere irradiance on a horizontal plane.
    
    Parameters
    ----------
    year, month, day : int
        Calendar date of the observation.
    hour_utc : float
        UTC hour in [0, 24).
    lon_deg : float
        Longitude in degrees, east positive, [-180, 180].
    lat_deg : float
        Latitude in degrees, north positive, [-90, 90].
    
    Returns
    -------
    float
        Irradiance in W/m². Exactly 0.0 when the sun is at or below the
        horizon; otherwise at most ``SOLAR_CONSTANT_WM2 * E0``.
    
    Raises
    ------
    InvalidInput
        Hour, latitude or longitude out of range.
    InvalidDate
        Calendar-impossible date.
    """
    _validate_location(hour_utc, lon_deg, lat_deg)
    J = day_of_year(year, month, day)
    return _irradiance_for_day(J, hour_utc, lon_deg, lat_deg)


@lru_cache(maxsize=65536)
def _mean_irradiance(n_days: int, hour_utc: float, lon_deg: float, lat_deg: float) -> float:
    total = 0.0
    for J in range(1, n_days + 1):
        total += _irradiance_for_day(J, hour_utc, lon_deg, lat_deg)
    return total / n_days


def mean_toa_horizontal_irradiance_same_hour(year: int, hour_utc: float,
                                             lon_deg: float, lat_deg: float) -> float:
    """Mean TOA horizontal irradiance at one UTC hour over every day of ``year``.
    
    This is the "expected" irradiance for that clock hour at that location.
    The average runs over 365 or 366 days and uses the same per-day kernel
    as :func:`toa_horizontal_irradiance`, so it equals the plain average of
    the instantaneous values exactly.
    
    Results are memoized: a station reporting at fixed hours only costs one
    sweep over the year per (leap-ness, hour, location).
    """
    _validate_location(hour_utc, lon_deg, lat_deg)
    return _mean_irradiance(days_in_year(year), float(hour_utc), float(lon_deg), float(lat_deg))
