"""Case API routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import BaseModel

from ...app import Application
from ...errors import PortalError
from ...forms import CaseForm, Upload
from ...logging_config import get_logger
from ...models import Criminal, Session
from .deps import get_session, to_http_error

logger = get_logger(__name__)


async def _uploads(files: list[UploadFile]) -> list[Upload]:
    return [
        Upload(
            filename=f.filename or "upload",
            content=await f.read(),
            content_type=f.content_type or "application/octet-stream",
        )
        for f in files
    ]


async def case_form_fields(
    name: str = Form(""),
    age: str = Form(""),
    gender: str = Form("male"),
    father_name: str = Form(""),
    address: str = Form(""),
    fir_number: str = Form(""),
    id_proof_type: str = Form("aadhar"),
    id_proof_number: str = Form(""),
    identifiable_marks: list[str] = Form([]),
    warrant_details: str | None = Form(None),
    warrant_court: str | None = Form(None),
    warrant_case_number: str | None = Form(None),
    state: str = Form(""),
    district: str = Form(""),
    taluka: str = Form(""),
    police_station: str = Form(""),
    images: list[UploadFile] = File([]),
    documents: list[UploadFile] = File([]),
) -> CaseForm:
    """Multipart add/edit case form, files included."""
    return CaseForm(
        name=name,
        age=age,
        gender=gender,
        father_name=father_name,
        address=address,
        fir_number=fir_number,
        id_proof_type=id_proof_type,
        id_proof_number=id_proof_number,
        identifiable_marks=identifiable_marks,
        warrant_details=warrant_details,
        warrant_court=warrant_court,
        warrant_case_number=warrant_case_number,
        state=state,
        district=district,
        taluka=taluka,
        police_station=police_station,
        images=await _uploads(images),
        documents=await _uploads(documents),
    )


class SavedCaseResponse(BaseModel):
    """Response model for a created or updated case."""

    id: str


class StatusChangeRequest(BaseModel):
    """Request model for changing a case status."""

    status: str
    notes: str | None = None


class TimelineEntryResponse(BaseModel):
    """Response model for timeline entry."""

    id: str
    timestamp: datetime | None
    category: str
    actor_name: str
    rendered_message: str
    icon: str
    color: str


class TimelineResponse(BaseModel):
    """Response model for a case timeline."""

    case_id: str
    filter: str
    is_empty: bool
    entries: list[TimelineEntryResponse]


def create_cases_router(app: Application) -> APIRouter:
    """Create cases router."""
    router = APIRouter(prefix="/api/cases", tags=["cases"])

    @router.get("", response_model=list[Criminal])
    async def search_cases(
        query: str = Query("", description="Name, FIR number or ID"),
        session: Session = Depends(get_session),
    ) -> list[Criminal]:
        """Search criminal records (at least 3 characters)."""
        try:
            return await app.case_service.search(session, query)
        except PortalError as e:
            raise to_http_error(e)

    @router.post("", response_model=SavedCaseResponse, status_code=201)
    async def create_case(
        form: CaseForm = Depends(case_form_fields),
        session: Session = Depends(get_session),
    ) -> dict:
        """Validate and submit a new case record."""
        try:
            created = await app.case_service.create_case(session, form)
            return {"id": str(created["id"])}
        except PortalError as e:
            raise to_http_error(e)

    @router.get("/{case_id}", response_model=Criminal)
    async def get_case(
        case_id: str, session: Session = Depends(get_session)
    ) -> Criminal:
        """Get a case record."""
        try:
            return await app.case_service.get_case(session, case_id)
        except PortalError as e:
            raise to_http_error(e)

    @router.put("/{case_id}", response_model=SavedCaseResponse)
    async def update_case(
        case_id: str,
        form: CaseForm = Depends(case_form_fields),
        session: Session = Depends(get_session),
    ) -> dict:
        """Validate and submit edits to a case record."""
        try:
            updated = await app.case_service.update_case(
                session, case_id, form
            )
            return {"id": str(updated.get("id", case_id))}
        except PortalError as e:
            raise to_http_error(e)

    @router.post("/{case_id}/status")
    async def change_status(
        case_id: str,
        request: StatusChangeRequest,
        session: Session = Depends(get_session),
    ) -> dict:
        """Change the status of a case."""
        try:
            return await app.case_service.change_status(
                session, case_id, request.status, request.notes
            )
        except PortalError as e:
            raise to_http_error(e)

    @router.get("/{case_id}/timeline", response_model=TimelineResponse)
    async def get_timeline(
        case_id: str,
        filter: str = Query("all", description="all, status, edit or view"),
        session: Session = Depends(get_session),
    ) -> dict:
        """Get the merged status/audit history of a case."""
        try:
            result = await app.case_service.get_timeline(session, case_id, filter)
        except PortalError as e:
            raise to_http_error(e)
        except Exception as e:
            logger.error("Timeline failed for %s: %s", case_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

        return {
            "case_id": case_id,
            "filter": result.filter.value,
            "is_empty": result.is_empty,
            "entries": [entry.to_dict() for entry in result.entries],
        }

    return router
