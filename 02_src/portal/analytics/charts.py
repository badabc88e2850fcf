"""Shape records API analytics into dashboard tiles and chart data."""

from typing import Any

from ..models import ChartData, ChartDataset, DashboardStats, RecentActivity, StatCard
from ..timeline import parse_timestamp

TREND_PERIODS = ("daily", "weekly", "monthly")


def _count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_dashboard_stats(raw: dict | None) -> DashboardStats:
    raw = raw or {}
    return DashboardStats(
        total_cases=_count(raw.get("totalCases")),
        active_warrants=_count(raw.get("activeWarrants")),
        search_count=_count(raw.get("searchCount")),
        district_count=_count(raw.get("districtCount")),
    )


def stat_cards(stats: DashboardStats) -> list[StatCard]:
    """Dashboard tiles in display order. A None value renders as pending."""
    return [
        StatCard("Total Cases", stats.total_cases, "file-text", "blue"),
        StatCard("Active Warrants", stats.active_warrants, "users", "red"),
        StatCard("Recent Searches", stats.search_count, "search", "green"),
        StatCard("Districts", stats.district_count, "bar-chart", "purple"),
    ]


def parse_recent_activities(raw: list[dict] | None) -> list[RecentActivity]:
    return [
        RecentActivity(
            id=str(item.get("id", item.get("_id", ""))),
            description=str(item.get("description", "")),
            timestamp=parse_timestamp(item.get("timestamp")),
        )
        for item in raw or []
        if isinstance(item, dict)
    ]


def _column(rows: list[dict], key: str) -> list[Any]:
    return [row.get(key, 0) for row in rows]


def trend_chart(rows: list[dict] | None) -> ChartData:
    """Line chart of new cases and active warrants per period bucket."""
    rows = [r for r in rows or [] if isinstance(r, dict)]
    return ChartData(
        title="Case and Warrant Trends",
        labels=[str(r.get("_id", "")) for r in rows],
        datasets=[
            ChartDataset(
                label="New Cases",
                data=_column(rows, "newCases"),
                border_color="rgb(75, 192, 192)",
                tension=0.1,
            ),
            ChartDataset(
                label="Active Warrants",
                data=_column(rows, "activeWarrants"),
                border_color="rgb(255, 99, 132)",
                tension=0.1,
            ),
        ],
    )


def district_chart(rows: list[dict] | None) -> ChartData:
    """Bar chart of total cases and active warrants per district."""
    rows = [r for r in rows or [] if isinstance(r, dict)]
    return ChartData(
        title="Cases by District",
        labels=[str(r.get("_id", "")) for r in rows],
        datasets=[
            ChartDataset(
                label="Total Cases",
                data=_column(rows, "totalCases"),
                background_color="rgba(75, 192, 192, 0.5)",
            ),
            ChartDataset(
                label="Active Warrants",
                data=_column(rows, "activeWarrants"),
                background_color="rgba(255, 99, 132, 0.5)",
            ),
        ],
    )
