"""Case search, detail, editing, status changes and history."""

import asyncio
from typing import Any, Protocol

from ..client import IRecordsApi
from ..errors import ValidationError
from ..forms import CaseForm
from ..logging_config import get_logger, session_context
from ..models import (
    CaseImage,
    CaseStatus,
    Criminal,
    IdProof,
    Session,
    TimelineFilter,
    TimelineResult,
    Warrant,
)
from ..session import can_change_status, can_edit_case, require
from ..timeline import (
    EventTimelineBuilder,
    ITimelineBuilder,
    parse_audit_logs,
    parse_filter,
    parse_status_history,
    parse_timestamp,
)
from ..tracker import ITracker

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 3


def parse_warrant(raw: dict) -> Warrant:
    return Warrant(
        id=str(raw.get("id", raw.get("_id", ""))),
        details=str(raw.get("details", "")),
        issued_date=parse_timestamp(raw.get("issuedDate")),
        is_active=bool(raw.get("isActive", False)),
        court=raw.get("court"),
        case_number=raw.get("caseNumber"),
    )


def parse_criminal(raw: dict) -> Criminal:
    """Map a records API criminal document onto the Criminal model."""
    id_proof = raw.get("idProof")
    age = raw.get("age")
    return Criminal(
        id=str(raw.get("id", raw.get("_id", ""))),
        name=str(raw.get("name", "")),
        fir_number=str(raw.get("firNumber", "")),
        status=str(raw.get("status") or CaseStatus.ACTIVE.value),
        state=raw.get("state") or "",
        district=raw.get("district") or "",
        police_station=raw.get("policeStation") or "",
        age=int(age) if isinstance(age, (int, str)) and str(age).isdecimal() else None,
        father_name=raw.get("fatherName") or "",
        gender=raw.get("gender") or "",
        address=raw.get("address") or "",
        id_proof=(
            IdProof(
                type=str(id_proof.get("type") or ""),
                number=str(id_proof.get("number") or ""),
            )
            if isinstance(id_proof, dict)
            else None
        ),
        identifiable_marks=list(raw.get("identifiableMarks") or []),
        warrants=[parse_warrant(w) for w in raw.get("warrants") or []],
        images=[
            CaseImage(url=i.get("url", ""), type=i.get("type", ""))
            for i in raw.get("images") or []
        ],
        created_at=parse_timestamp(raw.get("createdAt")),
        updated_at=parse_timestamp(raw.get("updatedAt")),
        created_by=raw.get("createdBy"),
        last_updated_by=raw.get("lastUpdatedBy"),
    )


class ICaseService(Protocol):
    """Case operations offered to the HTTP layer."""

    async def search(self, session: Session, query: str) -> list[Criminal]:
        ...

    async def get_case(self, session: Session, case_id: str) -> Criminal:
        ...

    async def create_case(self, session: Session, form: CaseForm) -> dict:
        ...

    async def update_case(self, session: Session, case_id: str, form: CaseForm) -> dict:
        ...

    async def change_status(
        self, session: Session, case_id: str, new_status: str, notes: str | None = None
    ) -> dict:
        ...

    async def get_timeline(
        self, session: Session, case_id: str, filter: TimelineFilter | str = "all"
    ) -> TimelineResult:
        ...


class CaseService:
    """Binds records API calls to role checks, validation and tracing."""

    def __init__(
        self,
        api: IRecordsApi,
        tracker: ITracker,
        timeline_builder: ITimelineBuilder | None = None,
    ):
        self._api = api
        self._tracker = tracker
        self._builder = timeline_builder or EventTimelineBuilder()

    async def search(self, session: Session, query: str) -> list[Criminal]:
        """Search by name, FIR number or ID. Short queries return nothing."""
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []

        raw = await self._api.search_criminals(session, query)
        results = [parse_criminal(r) for r in raw if isinstance(r, dict)]

        await self._tracker.track(
            "case_searched",
            session.user.id,
            {"query": query, "result_count": len(results)},
        )
        return results

    async def get_case(self, session: Session, case_id: str) -> Criminal:
        raw = await self._api.get_criminal(session, case_id)
        criminal = parse_criminal(raw or {})
        await self._tracker.track("case_viewed", session.user.id, {"case_id": case_id})
        return criminal

    async def create_case(self, session: Session, form: CaseForm) -> dict:
        require(can_edit_case(session), "create cases", session)
        form.ensure_valid()

        created = await self._api.add_criminal(session, form)
        logger.info(
            "Case %s created",
            created.get("id"),
            extra=session_context(session, case_id=created.get("id")),
        )
        await self._tracker.track(
            "case_created",
            session.user.id,
            {"case_id": created.get("id"), "fir_number": form.fir_number},
        )
        return created

    async def update_case(self, session: Session, case_id: str, form: CaseForm) -> dict:
        require(can_edit_case(session), "edit cases", session)
        form.ensure_valid()

        updated = await self._api.update_criminal(session, case_id, form)
        await self._tracker.track("case_updated", session.user.id, {"case_id": case_id})
        return updated or {"id": case_id}

    async def change_status(
        self, session: Session, case_id: str, new_status: str, notes: str | None = None
    ) -> dict:
        """Move a case to ``new_status``.

        Raises:
            PermissionDeniedError: If the role may not change status.
            ValidationError: For unknown statuses or a no-op transition.
        """
        require(can_change_status(session), "change case status", session)

        try:
            status = CaseStatus(new_status)
        except ValueError:
            raise ValidationError(
                {"status": f"Unknown case status {new_status!r}"}
            ) from None

        current = parse_criminal(await self._api.get_criminal(session, case_id) or {})
        if current.status == status.value:
            raise ValidationError({"status": f"Case is already {status.value}"})

        notes = notes.strip() if notes else None
        result = await self._api.update_case_status(
            session, case_id, status.value, notes or None
        )
        logger.info(
            "Case %s status %s -> %s by %s",
            case_id,
            current.status,
            status.value,
            session.user.id,
            extra=session_context(session, case_id=case_id),
        )
        await self._tracker.track(
            "status_change_submitted",
            session.user.id,
            {
                "case_id": case_id,
                "previous_status": current.status,
                "new_status": status.value,
            },
        )
        return result or {"id": case_id, "status": status.value}

    async def get_timeline(
        self, session: Session, case_id: str, filter: TimelineFilter | str = "all"
    ) -> TimelineResult:
        """Fetch both history collections and assemble the timeline."""
        selected = parse_filter(filter)

        raw_status, raw_audit = await asyncio.gather(
            self._api.get_status_history(session, case_id),
            self._api.get_audit_logs(session, case_id),
        )
        status_events = parse_status_history(_or_empty(raw_status))
        audit_events = parse_audit_logs(_or_empty(raw_audit))

        result = self._builder.build(status_events, audit_events, selected)
        await self._tracker.track(
            "timeline_viewed",
            session.user.id,
            {
                "case_id": case_id,
                "filter": selected.value,
                "entry_count": len(result.entries),
            },
        )
        return result


def _or_empty(raw: Any) -> Any:
    # The records API answers an empty body for cases without history
    return [] if raw is None else raw
