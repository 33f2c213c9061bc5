"""Ingestion stage contract.

Enforces the guarantee that the adjusted-observation table carries the
irradiance terms and respects the correction identities.
"""

import numpy as np
import pandas as pd

from soltemp.contracts.base import require
from soltemp.records import ADJUSTED_COLUMNS


def assert_adjusted(df: pd.DataFrame, max_abs_correction_c: float) -> None:
    """Enforce ingestion stage contract.

    Parameters
    ----------
    df : pd.DataFrame
        Adjusted-observation table from IngestionPipeline.to_dataframe()

    max_abs_correction_c : float
        Correction cap used by the corrector (from config)

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Adjusted contract violated: output is {type(df)}, expected DataFrame"
    )
    for col in ADJUSTED_COLUMNS.values():
        require(
            col in df.columns,
            f"Adjusted contract violated: missing required column '{col}'"
        )
    if df.empty:
        return

    require(
        bool((df["G0h_Wm2"] >= 0).all() and (df["G0h_mean_Wm2"] >= 0).all()),
        "Adjusted contract violated: irradiance must be non-negative"
    )
    require(
        bool((df["correction_C"].abs() <= max_abs_correction_c).all()),
        f"Adjusted contract violated: |correction_C| exceeds {max_abs_correction_c}"
    )
    require(
        bool(np.allclose(df["temp_adj_C"], df["temp_raw_C"] - df["correction_C"])),
        "Adjusted contract violated: temp_adj_C != temp_raw_C - correction_C"
    )
