"""HTTP client for the external records API."""

from typing import Any, Literal, Protocol

import httpx

from ..errors import (
    ApiUnavailableError,
    NotFoundError,
    PayloadTooLargeError,
    RecordsApiError,
    SessionExpiredError,
)
from ..forms import CaseForm
from ..logging_config import get_logger
from ..models import Session

logger = get_logger(__name__)

TrendPeriod = Literal["daily", "weekly", "monthly"]


class IRecordsApi(Protocol):
    """Records API operations used by the portal."""

    async def search_criminals(self, session: Session, query: str) -> list[dict]:
        ...

    async def get_criminal(self, session: Session, case_id: str) -> dict:
        ...

    async def add_criminal(self, session: Session, form: CaseForm) -> dict:
        ...

    async def update_criminal(
        self, session: Session, case_id: str, form: CaseForm
    ) -> dict:
        ...

    async def update_case_status(
        self, session: Session, case_id: str, new_status: str, notes: str | None = None
    ) -> dict:
        ...

    async def get_status_history(self, session: Session, case_id: str) -> Any:
        ...

    async def get_audit_logs(self, session: Session, case_id: str) -> Any:
        ...

    async def get_dashboard_stats(self, session: Session) -> dict:
        ...

    async def get_recent_activities(self, session: Session) -> list[dict]:
        ...

    async def get_district_analytics(self, session: Session) -> list[dict]:
        ...

    async def get_trends(self, session: Session, period: TrendPeriod) -> list[dict]:
        ...


class RecordsApiClient:
    """Async client over httpx; every call carries the caller's bearer token."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Open the underlying connection pool."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )

    async def stop(self) -> None:
        """Close the connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        session: Session,
        **kwargs: Any,
    ) -> Any:
        if not self._client:
            raise RuntimeError("RecordsApiClient not started")

        try:
            response = await self._client.request(
                method, path, headers=session.authorization_header, **kwargs
            )
        except httpx.TransportError as e:
            logger.error("Records API unreachable: %s %s: %s", method, path, e)
            raise ApiUnavailableError(
                "Network error: please check your connection and try again"
            ) from e

        if response.is_error:
            raise self._error_for(response)

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_for(response: httpx.Response) -> RecordsApiError:
        status = response.status_code
        try:
            body = response.json()
            upstream = body.get("message") if isinstance(body, dict) else None
        except ValueError:
            upstream = None

        logger.warning(
            "Records API error %s on %s %s",
            status,
            response.request.method,
            response.request.url.path,
            extra={"status_code": status},
        )

        if status == 401:
            return SessionExpiredError("Session expired. Please log in again", status)
        if status == 404:
            return NotFoundError(upstream or "Record not found", status)
        if status == 413:
            return PayloadTooLargeError(
                "Files are too large. Please reduce the size of images/documents",
                status,
            )
        return RecordsApiError(upstream or f"Records API error ({status})", status)

    # Criminal records

    async def search_criminals(self, session: Session, query: str) -> list[dict]:
        return await self._request(
            "GET", "/api/criminals/search", session, params={"query": query}
        ) or []

    async def get_criminal(self, session: Session, case_id: str) -> dict:
        return await self._request("GET", f"/api/criminals/{case_id}", session)

    async def add_criminal(self, session: Session, form: CaseForm) -> dict:
        data, files = form.to_multipart(session)
        created = await self._request(
            "POST", "/api/criminals", session, data=data, files=files or None
        )
        if not isinstance(created, dict) or not created.get("id"):
            raise RecordsApiError(
                "Failed to add criminal record: Invalid response format"
            )
        return created

    async def update_criminal(
        self, session: Session, case_id: str, form: CaseForm
    ) -> dict:
        data, files = form.to_multipart(session)
        return await self._request(
            "PUT", f"/api/criminals/{case_id}", session, data=data, files=files or None
        )

    # Case history

    async def update_case_status(
        self, session: Session, case_id: str, new_status: str, notes: str | None = None
    ) -> dict:
        payload = {
            "status": new_status,
            "changedBy": session.user.id,
            "changedByName": session.user.name,
        }
        if notes:
            payload["notes"] = notes
        return await self._request(
            "PUT", f"/api/criminals/{case_id}/status", session, json=payload
        )

    async def get_status_history(self, session: Session, case_id: str) -> Any:
        return await self._request(
            "GET", f"/api/criminals/{case_id}/status-history", session
        )

    async def get_audit_logs(self, session: Session, case_id: str) -> Any:
        return await self._request(
            "GET", f"/api/criminals/{case_id}/audit-logs", session
        )

    # Analytics

    async def get_dashboard_stats(self, session: Session) -> dict:
        return await self._request("GET", "/api/analytics/dashboard", session) or {}

    async def get_recent_activities(self, session: Session) -> list[dict]:
        return await self._request(
            "GET", "/api/analytics/recent-activities", session
        ) or []

    async def get_district_analytics(self, session: Session) -> list[dict]:
        return await self._request("GET", "/api/analytics/districts", session) or []

    async def get_trends(self, session: Session, period: TrendPeriod) -> list[dict]:
        return await self._request(
            "GET", "/api/analytics/trends", session, params={"type": period}
        ) or []
