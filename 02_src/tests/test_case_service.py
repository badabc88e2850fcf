"""Tests for CaseService."""

import pytest

from portal.errors import (
    InvalidFilterError,
    MalformedInputError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from portal.forms import CaseForm
from portal.models import CaseStatus, EntryCategory, TimelineFilter


def filled_form() -> CaseForm:
    return CaseForm(
        name="Ravi Kumar",
        age="34",
        father_name="Suresh Kumar",
        fir_number="FIR-2024-009",
        id_proof_number="1234",
        state="Maharashtra",
        district="Pune",
        taluka="Haveli",
    )


class TestSearchAndView:
    """Tests for search and case detail."""

    @pytest.mark.asyncio
    async def test_short_query_skips_api(self, case_service, fake_api, viewer_session):
        """Test that queries under three characters return nothing without a request."""
        assert await case_service.search(viewer_session, " ra ") == []
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_search_maps_results(self, case_service, viewer_session, storage):
        results = await case_service.search(viewer_session, "FIR-2024")

        assert len(results) == 1
        assert results[0].fir_number == "FIR-2024-001"

        events = await storage.get_trace_events(event_types=["case_searched"])
        assert events[0].data == {"query": "FIR-2024", "result_count": 1}

    @pytest.mark.asyncio
    async def test_get_case(self, case_service, viewer_session):
        criminal = await case_service.get_case(viewer_session, "c1")

        assert criminal.name == "Ravi Kumar"
        assert criminal.age == 34
        assert criminal.id_proof.number == "1234-5678-9012"
        assert criminal.has_active_warrant
        assert [w.id for w in criminal.active_warrants] == ["w1"]
        assert criminal.created_at.year == 2024

    @pytest.mark.asyncio
    async def test_non_decimal_upstream_age(self, case_service, fake_api, viewer_session):
        """Test that a digit-like but non-decimal age from upstream reads as unknown."""
        fake_api.criminals["c1"]["age"] = "\u00b2"

        criminal = await case_service.get_case(viewer_session, "c1")

        assert criminal.age is None

    @pytest.mark.asyncio
    async def test_get_missing_case(self, case_service, viewer_session):
        with pytest.raises(NotFoundError):
            await case_service.get_case(viewer_session, "nope")


class TestEditing:
    """Tests for create and update."""

    @pytest.mark.asyncio
    async def test_viewer_cannot_create(self, case_service, fake_api, viewer_session):
        with pytest.raises(PermissionDeniedError):
            await case_service.create_case(viewer_session, filled_form())

        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_invalid_form_not_sent(self, case_service, fake_api, admin_session):
        with pytest.raises(ValidationError) as exc_info:
            await case_service.create_case(admin_session, CaseForm(name="X"))

        assert "fir_number" in exc_info.value.errors
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_create(self, case_service, investigator_session, storage):
        created = await case_service.create_case(investigator_session, filled_form())

        assert created["id"] == "c-new"
        events = await storage.get_trace_events(event_types=["case_created"])
        assert events[0].data["case_id"] == "c-new"

    @pytest.mark.asyncio
    async def test_update(self, case_service, admin_session):
        assert await case_service.update_case(admin_session, "c1", filled_form()) == {
            "id": "c1"
        }


class TestChangeStatus:
    """Tests for status transitions."""

    @pytest.mark.asyncio
    async def test_viewer_denied(self, case_service, fake_api, viewer_session):
        with pytest.raises(PermissionDeniedError):
            await case_service.change_status(viewer_session, "c1", "closed")

        assert fake_api.criminals["c1"]["status"] == "active"

    @pytest.mark.asyncio
    async def test_unknown_status(self, case_service, admin_session):
        with pytest.raises(ValidationError) as exc_info:
            await case_service.change_status(admin_session, "c1", "escaped")

        assert "status" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_same_status_rejected(self, case_service, admin_session):
        with pytest.raises(ValidationError, match="already active"):
            await case_service.change_status(admin_session, "c1", "active")

    @pytest.mark.asyncio
    async def test_change(self, case_service, fake_api, investigator_session, storage):
        result = await case_service.change_status(
            investigator_session, "c1", CaseStatus.CLOSED, "  Court order  "
        )

        assert result["status"] == "closed"
        assert fake_api.criminals["c1"]["status"] == "closed"

        events = await storage.get_trace_events(event_types=["status_change_submitted"])
        assert events[0].data == {
            "case_id": "c1",
            "previous_status": "active",
            "new_status": "closed",
        }


class TestTimeline:
    """Tests for get_timeline."""

    @pytest.mark.asyncio
    async def test_merged_newest_first(self, case_service, viewer_session):
        result = await case_service.get_timeline(viewer_session, "c1")

        assert [e.id for e in result.entries] == ["a3", "a2", "s1", "a1"]
        assert result.entries[2].rendered_message == (
            "Status changed from active to arrested\nNote: Picked up at bus stand"
        )
        assert result.entries[1].rendered_message == 'Updated district from "A" to "B"'

    @pytest.mark.asyncio
    async def test_filter(self, case_service, viewer_session):
        result = await case_service.get_timeline(viewer_session, "c1", "edit")

        assert result.filter is TimelineFilter.EDIT
        assert [e.category for e in result.entries] == [EntryCategory.UPDATE]

    @pytest.mark.asyncio
    async def test_no_history_is_empty(self, case_service, fake_api, viewer_session):
        fake_api.status_history["c1"] = []
        fake_api.audit_logs["c1"] = []

        result = await case_service.get_timeline(viewer_session, "c1")

        assert result.is_empty

    @pytest.mark.asyncio
    async def test_unknown_filter_checked_before_fetch(
        self, case_service, fake_api, viewer_session
    ):
        with pytest.raises(InvalidFilterError):
            await case_service.get_timeline(viewer_session, "c1", "deleted")

        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_malformed_history(self, case_service, fake_api, viewer_session):
        fake_api.audit_logs["c1"] = {"logs": []}

        with pytest.raises(MalformedInputError):
            await case_service.get_timeline(viewer_session, "c1")

    @pytest.mark.asyncio
    async def test_view_is_tracked(self, case_service, viewer_session, storage):
        await case_service.get_timeline(viewer_session, "c1", TimelineFilter.STATUS)

        events = await storage.get_trace_events(event_types=["timeline_viewed"])
        assert events[0].actor == viewer_session.user.id
        assert events[0].data == {"case_id": "c1", "filter": "status", "entry_count": 1}
