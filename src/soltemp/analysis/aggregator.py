"""Monthly aggregation of normalized observations."""

import logging
from typing import Dict

import pandas as pd

from soltemp.solar.geometry import fractional_year

__all__ = ['MonthlyAggregator', 'adjusted_timeline']

logger = logging.getLogger(__name__)

TIMELINE_SERIES = "timeline"
SERIES_TABLE_COLUMNS = ("series", "year", "month", "fractional_year", "mean")


class MonthlyAggregator:
    """Group normalized values by (year, month) and derive monthly series.

    Parameters
    ----------
    value_column : str, default "normalized"
        Column to average.

    Examples
    --------
    >>> agg = MonthlyAggregator()
    >>> by_month = agg.aggregate(normalized_df)
    >>> timeline = agg.timeline(by_month)
    """

    def __init__(self, value_column: str = "normalized"):
        self.value_column = value_column

    def aggregate(self, df: pd.DataFrame) -> pd.DataFrame:
        """MonthlyMean table: ``year, month, sum, count, mean``.

        Only months with at least one observation appear.
        """
        by_month = (
            df.groupby(["year", "month"])[self.value_column]
            .agg(["sum", "count"])
            .reset_index()
        )
        by_month = by_month[by_month["count"] > 0].copy()
        by_month["mean"] = by_month["sum"] / by_month["count"]
        by_month = by_month.sort_values(["year", "month"]).reset_index(drop=True)
        logger.info("Aggregated %d rows into %d monthly means", len(df), len(by_month))
        return by_month

    def monthly_series(self, by_month: pd.DataFrame) -> Dict[int, pd.DataFrame]:
        """One series per calendar month, keyed 1..12, each with ``year, mean``.

        Months never observed give an empty series.
        """
        series = {}
        for month in range(1, 13):
            rows = by_month[by_month["month"] == month]
            series[month] = rows[["year", "mean"]].sort_values("year").reset_index(drop=True)
        return series

    def timeline(self, by_month: pd.DataFrame) -> pd.DataFrame:
        """MonthlySeries: ``year, month, fractional_year, mean`` in time order."""
        out = by_month[["year", "month", "mean"]].copy()
        out["fractional_year"] = fractional_year(out["year"], out["month"])
        out = out.sort_values("fractional_year").reset_index(drop=True)
        return out[["year", "month", "fractional_year", "mean"]]

    def to_series_table(self, by_month: pd.DataFrame) -> pd.DataFrame:
        """Long table of the normalized monthly series.

        Columns ``series, year, month, fractional_year, mean``. Series
        "01".."12" hold the rows of one calendar month in year order; the
        "timeline" series holds every row in time order.
        """
        timeline = self.timeline(by_month)
        frames = []
        for month in range(1, 13):
            rows = timeline[timeline["month"] == month].sort_values("year")
            frames.append(rows.assign(series=f"{month:02d}"))
        frames.append(timeline.assign(series=TIMELINE_SERIES))

        table = pd.concat(frames, ignore_index=True)
        return table[list(SERIES_TABLE_COLUMNS)]


def adjusted_timeline(df: pd.DataFrame, value_column: str = "temp_adj_C") -> pd.DataFrame:
    """Per-observation timeline of the adjusted temperature.

    Returns ``fractional_year, value`` sorted in time, with
    ``fractional_year = year + (month-1)/12 + (day-1)/365``.
    """
    out = pd.DataFrame({
        "fractional_year": fractional_year(df["year"], df["month"], df["day"]),
        "value": df[value_column],
    })
    return out.sort_values("fractional_year", kind="stable").reset_index(drop=True)
