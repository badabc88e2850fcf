"""Session API routes."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...app import Application
from ...models import Role, Session, User
from ...session import decode_session, issue_dev_token, permissions
from .deps import get_session


class DevLoginRequest(BaseModel):
    """Request model for a development login."""

    name: str = "John Doe"
    email: str = "john@example.com"
    role: Role = Role.VIEWER
    user_id: str = "123"
    district: str | None = None
    state: str | None = None
    police_station: str | None = None


class SessionResponse(BaseModel):
    """Response model for the current session."""

    user: User
    permissions: dict[str, bool]


class LoginResponse(SessionResponse):
    """Response model for a login."""

    token: str


def create_session_router(app: Application) -> APIRouter:
    """Create session router."""
    router = APIRouter(prefix="/api/session", tags=["session"])

    @router.post("/dev-login", response_model=LoginResponse)
    async def dev_login(request: DevLoginRequest) -> dict:
        """Fabricate a token for local development."""
        if not app.settings.allow_dev_login:
            raise HTTPException(status_code=404, detail="Development login disabled")

        token = issue_dev_token(
            user_id=request.user_id,
            name=request.name,
            email=request.email,
            role=request.role,
            district=request.district,
            state=request.state,
            policeStation=request.police_station,
        )
        session = decode_session(token)
        return {
            "token": token,
            "user": session.user,
            "permissions": permissions(session),
        }

    @router.get("", response_model=SessionResponse)
    async def current_session(session: Session = Depends(get_session)) -> dict:
        """Describe the signed-in user and what they may do."""
        return {"user": session.user, "permissions": permissions(session)}

    return router
