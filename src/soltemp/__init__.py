"""`soltemp` - solar-irradiance temperature correction and periodicity analysis.

Subpackages:
- solar: Solar geometry and temperature correction
- pipeline: Ingestion, worker threads, orchestrator
- analysis: Day-of-year normalization, monthly aggregation, periodogram
"""

__version__ = "0.1.0"
