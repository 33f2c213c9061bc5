"""Periodicity stage contract.

Enforces the shape of the spectral Dataset handed to persistence and
plotting collaborators.
"""

import numpy as np
import xarray as xr

from soltemp.contracts.base import require


def assert_spectrum(ds: xr.Dataset, n_period_bins: int) -> None:
    """Enforce periodicity stage contract.

    Parameters
    ----------
    ds : xr.Dataset
        Output from PeriodicityAnalyzer.analyze()

    n_period_bins : int
        Configured number of periodogram buckets

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    for var in ("grid", "power", "periodogram"):
        require(
            var in ds.data_vars,
            f"Spectrum contract violated: missing '{var}' variable"
        )
    for coord in ("month_index", "frequency", "period"):
        require(
            coord in ds.coords,
            f"Spectrum contract violated: missing '{coord}' coordinate"
        )

    n_grid = ds.sizes["month_index"]
    require(
        n_grid % 12 == 0,
        f"Spectrum contract violated: grid length {n_grid} is not whole years"
    )
    require(
        ds.sizes["frequency"] == n_grid // 2,
        f"Spectrum contract violated: {ds.sizes['frequency']} frequency bins, expected {n_grid // 2}"
    )
    require(
        ds.sizes["period"] == n_period_bins,
        f"Spectrum contract violated: {ds.sizes['period']} period bins, expected {n_period_bins}"
    )
    require(
        bool(np.all(ds["power"].values >= 0)) and bool(np.all(ds["periodogram"].values >= 0)),
        "Spectrum contract violated: negative power"
    )
