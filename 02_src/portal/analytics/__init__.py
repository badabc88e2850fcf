"""Analytics module."""

from .charts import (
    TREND_PERIODS,
    district_chart,
    parse_dashboard_stats,
    parse_recent_activities,
    stat_cards,
    trend_chart,
)

__all__ = [
    "TREND_PERIODS",
    "district_chart",
    "parse_dashboard_stats",
    "parse_recent_activities",
    "stat_cards",
    "trend_chart",
]
