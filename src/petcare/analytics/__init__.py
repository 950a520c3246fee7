"""Statistics and dashboard aggregates."""

from .aggregator import (
    WEEKDAY_NAMES,
    AnalyticsAggregator,
    CompletionRatePoint,
    Period,
    PeriodStatistics,
    PetStatistics,
    StatisticsReport,
)
from .dashboard import DashboardSummary
from .service import StatisticsService

__all__ = [
    "WEEKDAY_NAMES",
    "AnalyticsAggregator",
    "CompletionRatePoint",
    "DashboardSummary",
    "Period",
    "PeriodStatistics",
    "PetStatistics",
    "StatisticsReport",
    "StatisticsService",
]
