"""Control API routes."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...app import IApplication
from ...models import Role, Session
from .deps import get_session


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system(session: Session = Depends(get_session)) -> dict:
        """Clear recorded portal activity (admins only)."""
        if session.user.role is not Role.ADMIN:
            raise HTTPException(status_code=403, detail="Admin role required")
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
