"""Normalization and aggregation stage contracts."""

import pandas as pd

from soltemp.contracts.base import require


def assert_normalized(df: pd.DataFrame) -> None:
    """Enforce normalization contract: every value lies in [0, 1].

    Raises
    ------
    ContractViolation
        If the column is missing or any value is out of range / NaN
    """
    require(
        "normalized" in df.columns,
        "Normalization contract violated: missing 'normalized' column"
    )
    require(
        "day_of_year" in df.columns,
        "Normalization contract violated: missing 'day_of_year' column"
    )
    values = df["normalized"]
    require(
        bool(values.between(0.0, 1.0).all()),
        "Normalization contract violated: values outside [0, 1] or NaN"
    )


def assert_monthly(df: pd.DataFrame) -> None:
    """Enforce aggregation contract on the MonthlyMean table.

    One row per observed (year, month); empty months never appear.
    """
    for col in ("year", "month", "count", "mean"):
        require(
            col in df.columns,
            f"Monthly contract violated: missing required column '{col}'"
        )
    if df.empty:
        return
    require(
        bool((df["count"] > 0).all()),
        "Monthly contract violated: count must be > 0 for all rows"
    )
    require(
        bool(df["month"].between(1, 12).all()),
        "Monthly contract violated: month outside 1..12"
    )
    require(
        not df.duplicated(["year", "month"]).any(),
        "Monthly contract violated: duplicate (year, month) keys"
    )
