"""Irradiance-based temperature correction for single observations.

The correction compares the instantaneous TOA irradiance with the mean
irradiance at the same UTC hour across the whole year. This isolates the
temperature signal from the systematic solar-loading artifact of the
clock hour, rather than removing a raw seasonal average.

    correction = clamp(beta * (G0h - G0h_mean), -cap, +cap)
    temp_adj   = temperature - correction
"""

import logging
from typing import TYPE_CHECKING

from soltemp.errors import InvalidParameter
from soltemp.records import AdjustedObservation, RawObservation
from soltemp.solar.geometry import (
    mean_toa_horizontal_irradiance_same_hour,
    toa_horizontal_irradiance,
)

if TYPE_CHECKING:
    from soltemp.schemas import InternalConfig

__all__ = ['TemperatureCorrector']

logger = logging.getLogger(__name__)


class TemperatureCorrector:
    """Remove the solar-loading bias from temperature observations.
    
    Parameters
    ----------
    beta : float, default 0.003
        Temperature response in °C per W/m². Must lie in (0, 1).
    max_abs_correction_c : float, default 20.0
        Cap on the absolute correction in °C. Must be positive.
    
    Raises
    ------
    InvalidParameter
        If beta or the cap is outside its admissible range. This is a
        configuration error and is fatal for a run.
    
    Examples
    --------
    >>> corrector = TemperatureCorrector()
    >>> obs = RawObservation(1958, 6, 21, 12, 17.0, 57.7607, 12.9468)
    >>> adjusted = corrector.adjust(obs)
    >>> adjusted.temp_adj_c == obs.temperature_c - adjusted.correction_c
    True
    """

    def __init__(self, beta: float = 0.003, max_abs_correction_c: float = 20.0):
        if not 0.0 < beta < 1.0:
            raise InvalidParameter(f"beta must be in (0, 1) degC per W/m2 (try 0.003), got {beta}")
        if not max_abs_correction_c > 0.0:
            raise InvalidParameter(
                f"max_abs_correction_c must be positive, got {max_abs_correction_c}"
            )
        self.beta = float(beta)
        self.max_abs_correction_c = float(max_abs_correction_c)

    @classmethod
    def from_config(cls, config: "InternalConfig") -> "TemperatureCorrector":
        return cls(
            beta=config.corrector.beta,
            max_abs_correction_c=config.corrector.max_abs_correction_c,
        )

    def correction_for(self, g0h: float, g0h_mean: float) -> float:
        """Capped correction in °C for an irradiance pair."""
        correction = self.beta * (g0h - g0h_mean)
        cap = self.max_abs_correction_c
        return min(max(correction, -cap), cap)

    def adjust(self, observation: RawObservation) -> AdjustedObservation:
        """Compute irradiance terms and the adjusted temperature for one record.
        
        Raises
        ------
        InvalidDate, InvalidInput
            Propagated from the geometry for calendar-impossible dates or
            out-of-range hour/lat/lon. Local to this record.
        """
        g0h = toa_horizontal_irradiance(
            observation.year, observation.month, observation.day,
            observation.hour_utc, observation.longitude_deg, observation.latitude_deg,
        )
        g0h_mean = mean_toa_horizontal_irradiance_same_hour(
            observation.year, observation.hour_utc,
            observation.longitude_deg, observation.latitude_deg,
        )
        correction = self.correction_for(g0h, g0h_mean)

        return AdjustedObservation(
            *observation,
            g0h_wm2=g0h,
            g0h_mean_wm2=g0h_mean,
            correction_c=correction,
            temp_adj_c=observation.temperature_c - correction,
        )
