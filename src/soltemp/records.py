"""Record types flowing through the ingestion stage.

Records are immutable named tuples: cheap to create per input line and
directly convertible to a pandas DataFrame (field names become columns).
Downstream stages work on the adjusted-observation table, whose column
names are given by ``ADJUSTED_COLUMNS``.
"""

from typing import NamedTuple

__all__ = ['RawObservation', 'AdjustedObservation', 'ADJUSTED_COLUMNS', 'RAW_COLUMNS']


class RawObservation(NamedTuple):
    """One parsed input line."""
    year: int
    month: int
    day: int
    hour_utc: int
    temperature_c: float
    latitude_deg: float
    longitude_deg: float


class AdjustedObservation(NamedTuple):
    """RawObservation plus irradiance terms and the corrected temperature.
    
    Invariants: ``temp_adj_c == temperature_c - correction_c`` and
    ``abs(correction_c) <= max_abs_correction_c`` of the corrector that built it.
    """
    year: int
    month: int
    day: int
    hour_utc: int
    temperature_c: float
    latitude_deg: float
    longitude_deg: float
    g0h_wm2: float
    g0h_mean_wm2: float
    correction_c: float
    temp_adj_c: float


# Column names of the adjusted-observation table, in field order
ADJUSTED_COLUMNS = {
    "year": "year",
    "month": "month",
    "day": "day",
    "hour_utc": "hour_utc",
    "temperature_c": "temp_raw_C",
    "latitude_deg": "lat_deg",
    "longitude_deg": "lon_deg",
    "g0h_wm2": "G0h_Wm2",
    "g0h_mean_wm2": "G0h_mean_Wm2",
    "correction_c": "correction_C",
    "temp_adj_c": "temp_adj_C",
}

RAW_COLUMNS = list(ADJUSTED_COLUMNS.values())[:7]
