"""Dashboard and analytics views."""

import asyncio

from ..analytics import (
    TREND_PERIODS,
    district_chart,
    parse_dashboard_stats,
    parse_recent_activities,
    stat_cards,
    trend_chart,
)
from ..client import IRecordsApi
from ..errors import ValidationError
from ..models import ChartData, RecentActivity, Session, StatCard
from ..session import can_view_analytics, require
from ..tracker import ITracker


class AnalyticsService:
    """Fetches analytics from the records API and shapes them for display."""

    def __init__(self, api: IRecordsApi, tracker: ITracker):
        self._api = api
        self._tracker = tracker

    async def dashboard(
        self, session: Session
    ) -> tuple[list[StatCard], list[RecentActivity]]:
        """Stat tiles plus the recent activity feed."""
        raw_stats, raw_activities = await asyncio.gather(
            self._api.get_dashboard_stats(session),
            self._api.get_recent_activities(session),
        )
        return (
            stat_cards(parse_dashboard_stats(raw_stats)),
            parse_recent_activities(raw_activities),
        )

    async def recent_activities(self, session: Session) -> list[RecentActivity]:
        return parse_recent_activities(await self._api.get_recent_activities(session))

    async def trends(self, session: Session, period: str = "daily") -> ChartData:
        require(can_view_analytics(session), "view analytics", session)
        if period not in TREND_PERIODS:
            raise ValidationError(
                {"period": f"Period must be one of {', '.join(TREND_PERIODS)}"}
            )

        chart = trend_chart(await self._api.get_trends(session, period))
        await self._tracker.track(
            "analytics_viewed", session.user.id, {"chart": "trends", "period": period}
        )
        return chart

    async def districts(self, session: Session) -> ChartData:
        require(can_view_analytics(session), "view analytics", session)
        chart = district_chart(await self._api.get_district_analytics(session))
        await self._tracker.track(
            "analytics_viewed", session.user.id, {"chart": "districts"}
        )
        return chart
