"""Two-pass day-of-year normalization.

Pass 1 (``fit``) scans the whole adjusted table and records, for each day of
year, the minimum, maximum and count of the temperature column. Pass 2
(``transform``) maps every temperature onto [0, 1] within its day-of-year
range. Pass 2 needs the statistics of the complete dataset, so ``normalize``
always finishes pass 1 before starting pass 2.
"""

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np
import pandas as pd

from soltemp.solar.geometry import day_of_year_array

if TYPE_CHECKING:
    from soltemp.schemas import InternalConfig

__all__ = ['DayOfYearNormalizer']

logger = logging.getLogger(__name__)

DEGENERATE_VALUE = 0.5


class DayOfYearNormalizer:
    """Normalize temperatures within their day-of-year range.

    Parameters
    ----------
    min_day_of_year, max_day_of_year : int
        Inclusive day-of-year bounds; rows outside are dropped in both passes.
    value_column : str, default "temp_adj_C"
        Column of the adjusted-observation table to normalize.

    Attributes
    ----------
    stats_ : pd.DataFrame or None
        Per-day-of-year ``min``, ``max`` and ``count``, indexed by
        ``day_of_year``. Set by ``fit`` and not modified afterwards.

    Notes
    -----
    A day of year whose min equals its max (typically a single observation)
    has no range; its rows get ``normalized = 0.5``. Calendar-impossible
    dates are dropped.
    """

    def __init__(self, min_day_of_year: int = 1, max_day_of_year: int = 366,
                 value_column: str = "temp_adj_C"):
        self.min_day_of_year = min_day_of_year
        self.max_day_of_year = max_day_of_year
        self.value_column = value_column
        self.stats_: Optional[pd.DataFrame] = None

    @classmethod
    def from_config(cls, config: "InternalConfig") -> "DayOfYearNormalizer":
        return cls(
            min_day_of_year=config.normalizer.min_day_of_year,
            max_day_of_year=config.normalizer.max_day_of_year,
        )

    def _with_day_of_year(self, df: pd.DataFrame) -> pd.DataFrame:
        doy = day_of_year_array(df["year"], df["month"], df["day"])
        keep = (doy >= self.min_day_of_year) & (doy <= self.max_day_of_year)
        out = df.loc[keep].copy()
        out["day_of_year"] = doy[keep]
        return out

    def fit(self, df: pd.DataFrame) -> "DayOfYearNormalizer":
        """Pass 1: per-day-of-year min/max/count over the whole table."""
        table = self._with_day_of_year(df)
        self.stats_ = (
            table.groupby("day_of_year")[self.value_column]
            .agg(["min", "max", "count"])
            .sort_index()
        )
        logger.info("Day-of-year stats: %d days from %d rows (%d dropped)",
                    len(self.stats_), len(table), len(df) - len(table))
        return self

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Pass 2: add ``day_of_year`` and ``normalized`` columns.

        Raises
        ------
        RuntimeError
            If called before ``fit``.
        """
        if self.stats_ is None:
            raise RuntimeError("DayOfYearNormalizer.transform() called before fit()")

        table = self._with_day_of_year(df)
        table = table[table["day_of_year"].isin(self.stats_.index)].copy()

        lo = table["day_of_year"].map(self.stats_["min"]).to_numpy(dtype=float)
        hi = table["day_of_year"].map(self.stats_["max"]).to_numpy(dtype=float)
        values = table[self.value_column].to_numpy(dtype=float)

        span = hi - lo
        degenerate = span == 0
        with np.errstate(divide="ignore", invalid="ignore"):
            scaled = np.clip((values - lo) / span, 0.0, 1.0)
        table["normalized"] = np.where(degenerate, DEGENERATE_VALUE, scaled)

        n_degenerate = int((self.stats_["max"] == self.stats_["min"]).sum())
        if n_degenerate:
            logger.info("%d day-of-year groups have no range, normalized to %.1f",
                        n_degenerate, DEGENERATE_VALUE)
        return table

    def normalize(self, df: pd.DataFrame) -> pd.DataFrame:
        """Run pass 1 on the whole table, then pass 2."""
        return self.fit(df).transform(df)
