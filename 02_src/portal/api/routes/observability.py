"""Portal activity log routes (admins only)."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ...app import IApplication
from ...errors import PortalError
from ...models import Session
from ...session import can_view_activity, require
from ...timeline import parse_timestamp
from .deps import get_session, to_http_error


class TraceEventResponse(BaseModel):
    """One recorded portal action."""

    id: str
    event_type: str
    actor: str
    case_id: str | None
    data: dict[str, Any]
    timestamp: datetime


def create_observability_router(app: IApplication) -> APIRouter:
    """Create the activity log router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="e.g. timeline_viewed"),
        actor: str | None = Query(None, description="Officer user id"),
        case_id: str | None = Query(None, description="Only actions on this case"),
        session: Session = Depends(get_session),
    ) -> list[dict]:
        """Who did what, newest first."""
        try:
            require(can_view_activity(session), "view portal activity", session)
        except PortalError as e:
            raise to_http_error(e)

        after_dt = parse_timestamp(after) if after else None
        if after and after_dt is None:
            raise HTTPException(status_code=400, detail="Invalid after timestamp format")

        events = await app.storage.get_trace_events(
            after=after_dt,
            event_types=[event_type] if event_type else None,
            actor=actor,
            case_id=case_id,
            limit=limit,
        )
        return [
            {
                "id": e.id,
                "event_type": e.event_type,
                "actor": e.actor,
                "case_id": e.data.get("case_id"),
                "data": e.data,
                "timestamp": e.timestamp,
            }
            for e in events
        ]

    return router
