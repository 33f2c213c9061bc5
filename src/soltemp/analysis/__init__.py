"""Whole-dataset analysis stages: normalization, aggregation, spectrum."""

from soltemp.analysis.normalizer import DayOfYearNormalizer
from soltemp.analysis.aggregator import MonthlyAggregator, adjusted_timeline
from soltemp.analysis.periodicity import PeriodicityAnalyzer

__all__ = [
    "DayOfYearNormalizer",
    "MonthlyAggregator",
    "adjusted_timeline",
    "PeriodicityAnalyzer",
]
