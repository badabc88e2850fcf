"""Analytics API routes."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ...app import Application
from ...errors import PortalError
from ...models import RecentActivity, Session, StatCard
from .deps import get_session, to_http_error


class DashboardResponse(BaseModel):
    """Response model for the dashboard."""

    welcome: str
    role: str
    stats: list[StatCard]
    recent_activities: list[RecentActivity]


def create_analytics_router(app: Application) -> APIRouter:
    """Create analytics router."""
    router = APIRouter(prefix="/api/analytics", tags=["analytics"])

    @router.get("/dashboard", response_model=DashboardResponse)
    async def dashboard(session: Session = Depends(get_session)) -> dict:
        """Stat tiles and recent activity for the signed-in user."""
        try:
            stats, activities = await app.analytics_service.dashboard(session)
        except PortalError as e:
            raise to_http_error(e)
        return {
            "welcome": f"Welcome, {session.user.name or 'User'}",
            "role": session.user.role.value.capitalize(),
            "stats": stats,
            "recent_activities": activities,
        }

    @router.get("/recent-activities", response_model=list[RecentActivity])
    async def recent_activities(
        session: Session = Depends(get_session),
    ) -> list[RecentActivity]:
        try:
            return await app.analytics_service.recent_activities(session)
        except PortalError as e:
            raise to_http_error(e)

    @router.get("/trends")
    async def trends(
        period: str = Query("daily", description="daily, weekly or monthly"),
        session: Session = Depends(get_session),
    ) -> dict[str, Any]:
        """Line chart data for case and warrant trends."""
        try:
            chart = await app.analytics_service.trends(session, period)
        except PortalError as e:
            raise to_http_error(e)
        return chart.to_dict()

    @router.get("/districts")
    async def districts(session: Session = Depends(get_session)) -> dict[str, Any]:
        """Bar chart data for cases by district."""
        try:
            chart = await app.analytics_service.districts(session)
        except PortalError as e:
            raise to_http_error(e)
        return chart.to_dict()

    return router
