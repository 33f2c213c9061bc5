"""Spectral analysis of the monthly normalized series.

The monthly means are laid out on a uniform month grid spanning whole
years, detrended, and transformed with a real FFT. The one-sided power
spectrum is then re-binned from frequency into period (years) to give a
periodogram over a fixed period range.

Grid
----
``N = 12 * (year_max - year_min + 1)``; month ``(y, m)`` sits at index
``12 * (y - year_min) + (m - 1)``. Months without data are 0.0 before
detrending (zero-fill), then the mean of the full grid is subtracted.

Spectrum
--------
Bins ``i = 0 .. N/2 - 1`` of the unnormalized DFT, ``power = re**2 + im**2``,
``frequency = 12 * i / N`` cycles per year (Nyquist = 6).
"""

import logging
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import xarray as xr
from scipy.fft import rfft

from soltemp.errors import EmptyDataset

if TYPE_CHECKING:
    from soltemp.schemas import InternalConfig

__all__ = ['PeriodicityAnalyzer']

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class PeriodicityAnalyzer:
    """Build the monthly grid, its spectrum and the period-domain periodogram.

    Parameters
    ----------
    period_min_years, period_max_years : float
        Periodogram range in years.
    n_period_bins : int
        Number of uniform period buckets over the range.
    focus_min_years, focus_max_years : float
        Band used by ``focus_band`` and ``dominant_periods``.
    """

    def __init__(self, period_min_years: float = 0.5, period_max_years: float = 50.0,
                 n_period_bins: int = 500, focus_min_years: float = 2.0,
                 focus_max_years: float = 20.0):
        self.period_min_years = float(period_min_years)
        self.period_max_years = float(period_max_years)
        self.n_period_bins = int(n_period_bins)
        self.focus_min_years = float(focus_min_years)
        self.focus_max_years = float(focus_max_years)

    @classmethod
    def from_config(cls, config: "InternalConfig") -> "PeriodicityAnalyzer":
        p = config.periodicity
        return cls(
            period_min_years=p.period_min_years,
            period_max_years=p.period_max_years,
            n_period_bins=p.n_period_bins,
            focus_min_years=p.focus_min_years,
            focus_max_years=p.focus_max_years,
        )

    @property
    def bin_width(self) -> float:
        return (self.period_max_years - self.period_min_years) / self.n_period_bins

    @property
    def period_centers(self) -> np.ndarray:
        """Centre of each period bucket in years."""
        idx = np.arange(self.n_period_bins)
        return self.period_min_years + (idx + 0.5) * self.bin_width

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    def build_grid(self, by_month: pd.DataFrame):
        """Place monthly means on a zero-filled uniform grid.

        Parameters
        ----------
        by_month : pd.DataFrame
            MonthlyMean table with ``year, month, mean``.

        Returns
        -------
        grid : np.ndarray
            Length ``12 * (year_max - year_min + 1)``.
        year_min : int

        Raises
        ------
        EmptyDataset
            If ``by_month`` has no rows.
        """
        if by_month.empty:
            raise EmptyDataset("no monthly means to analyze")

        years = by_month["year"].to_numpy(dtype=np.int64)
        months = by_month["month"].to_numpy(dtype=np.int64)
        year_min, year_max = int(years.min()), int(years.max())

        n = MONTHS_PER_YEAR * (year_max - year_min + 1)
        grid = np.zeros(n, dtype=float)
        grid[MONTHS_PER_YEAR * (years - year_min) + (months - 1)] = by_month["mean"].to_numpy(dtype=float)

        n_filled = n - len(by_month)
        logger.info("Monthly grid: %d-%d, %d months, %d zero-filled",
                    year_min, year_max, n, n_filled)
        return grid, year_min

    @staticmethod
    def detrend(grid: np.ndarray) -> np.ndarray:
        """Subtract the mean of the full grid (zero-filled months included)."""
        return grid - grid.mean()

    # ------------------------------------------------------------------
    # Spectrum
    # ------------------------------------------------------------------

    @staticmethod
    def spectrum(grid: np.ndarray):
        """One-sided power spectrum of a monthly grid.

        Returns
        -------
        frequency : np.ndarray
            ``12 * i / N`` cycles per year, ``i = 0 .. N/2 - 1``.
        power : np.ndarray
            ``re**2 + im**2`` of the unnormalized DFT.
        """
        n = len(grid)
        n_half = n // 2
        coeffs = rfft(grid)[:n_half]
        power = coeffs.real ** 2 + coeffs.imag ** 2
        frequency = np.arange(n_half) * MONTHS_PER_YEAR / n
        return frequency, power

    def periodogram(self, frequency: np.ndarray, power: np.ndarray) -> np.ndarray:
        """Accumulate spectral power into uniform period buckets.

        The DC bin is skipped. Each remaining bin contributes to the bucket
        containing ``T = 1 / f`` when ``T`` lies in the period range; ``T``
        equal to the upper bound goes to the last bucket.
        """
        frequency = np.asarray(frequency, dtype=float)[1:]
        power = np.asarray(power, dtype=float)[1:]

        buckets = np.zeros(self.n_period_bins, dtype=float)
        positive = frequency > 0
        period = 1.0 / frequency[positive]
        power = power[positive]

        in_range = (period >= self.period_min_years) & (period <= self.period_max_years)
        idx = np.floor((period[in_range] - self.period_min_years) / self.bin_width).astype(np.int64)
        idx = np.minimum(idx, self.n_period_bins - 1)
        np.add.at(buckets, idx, power[in_range])
        return buckets

    def analyze(self, by_month: pd.DataFrame) -> xr.Dataset:
        """Run grid, detrend, spectrum and periodogram.

        Returns
        -------
        xr.Dataset
            Variables ``grid(month_index)`` (detrended), ``power(frequency)``
            and ``periodogram(period)``. ``fractional_year`` is an auxiliary
            coordinate of ``month_index``.
        """
        raw, year_min = self.build_grid(by_month)
        grid = self.detrend(raw)
        frequency, power = self.spectrum(grid)
        buckets = self.periodogram(frequency, power)

        month_index = np.arange(len(grid))
        ds = xr.Dataset(
            data_vars={
                "grid": ("month_index", grid),
                "power": ("frequency", power),
                "periodogram": ("period", buckets),
            },
            coords={
                "month_index": month_index,
                "fractional_year": ("month_index", year_min + month_index / MONTHS_PER_YEAR),
                "frequency": frequency,
                "period": self.period_centers,
            },
            attrs={
                "year_min": year_min,
                "n_months": len(grid),
                "grid_mean": float(raw.mean()),
                "period_min_years": self.period_min_years,
                "period_max_years": self.period_max_years,
            },
        )
        ds["frequency"].attrs["units"] = "cycles/year"
        ds["period"].attrs["units"] = "years"
        logger.info("Spectrum: %d frequency bins, %d period buckets",
                    ds.sizes["frequency"], ds.sizes["period"])
        return ds

    # ------------------------------------------------------------------
    # Focus band
    # ------------------------------------------------------------------

    def focus_band(self, ds: xr.Dataset) -> xr.DataArray:
        """Periodogram restricted to the focus band (default 2-20 years)."""
        return ds["periodogram"].sel(period=slice(self.focus_min_years, self.focus_max_years))

    def dominant_periods(self, ds: xr.Dataset, n: int = 5) -> pd.DataFrame:
        """Strongest ``n`` buckets of the focus band, by descending power."""
        band = self.focus_band(ds)
        df = pd.DataFrame({
            "period_years": band["period"].values,
            "power": band.values,
        })
        df = df[df["power"] > 0]
        return df.sort_values("power", ascending=False).head(n).reset_index(drop=True)
