"""Solar geometry and temperature correction.

- geometry: TOA irradiance and calendar helpers (pure functions)
- corrector: Per-observation irradiance correction
"""

from soltemp.solar.corrector import TemperatureCorrector

__all__ = ['TemperatureCorrector']
