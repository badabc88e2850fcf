"""Pytest configuration and fixtures."""

import json
import re
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeRecordsApi:
    """In-memory stand-in for the records API, served through httpx.MockTransport."""

    def __init__(self):
        self.criminals: dict[str, dict] = {
            "c1": {
                "id": "c1",
                "name": "Ravi Kumar",
                "firNumber": "FIR-2024-001",
                "status": "active",
                "age": 34,
                "fatherName": "Suresh Kumar",
                "gender": "male",
                "address": "12 Station Road",
                "state": "Maharashtra",
                "district": "Pune",
                "policeStation": "Shivajinagar",
                "idProof": {"type": "aadhar", "number": "1234-5678-9012"},
                "identifiableMarks": ["scar on left cheek"],
                "warrants": [
                    {
                        "id": "w1",
                        "details": "Non-bailable warrant",
                        "issuedDate": "2024-01-05T00:00:00Z",
                        "isActive": True,
                        "court": "Pune Sessions Court",
                        "caseNumber": "SC-99",
                    },
                    {
                        "id": "w2",
                        "details": "Summons",
                        "issuedDate": "2023-06-01T00:00:00Z",
                        "isActive": False,
                    },
                ],
                "images": [{"url": "http://img/1.jpg", "type": "profile"}],
                "createdAt": "2024-01-01T10:00:00Z",
                "updatedAt": "2024-02-01T10:00:00Z",
                "createdBy": "u1",
            },
        }
        self.status_history: dict[str, list] = {
            "c1": [
                {
                    "id": "s1",
                    "timestamp": "2024-01-10T09:00:00Z",
                    "previousStatus": "active",
                    "newStatus": "arrested",
                    "changedByName": "Insp. Patil",
                    "notes": "Picked up at bus stand",
                },
            ],
        }
        self.audit_logs: dict[str, list] = {
            "c1": [
                {
                    "id": "a1",
                    "timestamp": "2024-01-01T10:00:00Z",
                    "action": "create",
                    "performedByName": "Insp. Patil",
                },
                {
                    "id": "a2",
                    "timestamp": "2024-01-12T11:00:00Z",
                    "action": "update",
                    "field": "district",
                    "previousValue": "A",
                    "newValue": "B",
                    "performedByName": "SI Deshmukh",
                },
                {
                    "id": "a3",
                    "timestamp": "2024-01-15T08:30:00Z",
                    "action": "view",
                    "performedByName": "Const. Jadhav",
                },
            ],
        }
        self.dashboard = {
            "totalCases": 120,
            "activeWarrants": 45,
            "searchCount": 300,
            "districtCount": 12,
        }
        self.recent_activities = [
            {
                "id": "r1",
                "description": "Case FIR-2024-001 updated",
                "timestamp": "2024-01-12T11:00:00Z",
            }
        ]
        self.districts = [
            {"_id": "Pune", "totalCases": 40, "activeWarrants": 10},
            {"_id": "Nashik", "totalCases": 25, "activeWarrants": 7},
        ]
        self.trends = [
            {"_id": "2024-01-01", "newCases": 3, "activeWarrants": 9},
            {"_id": "2024-01-02", "newCases": 5, "activeWarrants": 11},
        ]
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "upstream says no"})

        method, path = request.method, request.url.path

        if path == "/api/criminals/search" and method == "GET":
            query = request.url.params.get("query", "").lower()
            hits = [
                c
                for c in self.criminals.values()
                if query in c["name"].lower() or query in c["firNumber"].lower()
            ]
            return httpx.Response(200, json=hits)

        if path == "/api/criminals" and method == "POST":
            return httpx.Response(201, json={"id": "c-new"})

        analytics = {
            "/api/analytics/dashboard": self.dashboard,
            "/api/analytics/recent-activities": self.recent_activities,
            "/api/analytics/districts": self.districts,
            "/api/analytics/trends": self.trends,
        }
        if path in analytics and method == "GET":
            return httpx.Response(200, json=analytics[path])

        match = re.fullmatch(r"/api/criminals/([^/]+)(/[a-z-]+)?", path)
        if not match:
            return httpx.Response(404, json={"message": "No such route"})

        case_id, sub = match.group(1), match.group(2)
        if case_id not in self.criminals:
            return httpx.Response(404, json={"message": "Criminal not found"})

        if sub is None and method == "GET":
            return httpx.Response(200, json=self.criminals[case_id])
        if sub is None and method == "PUT":
            return httpx.Response(200, json={"id": case_id})
        if sub == "/status" and method == "PUT":
            body = json.loads(request.content)
            self.criminals[case_id]["status"] = body["status"]
            return httpx.Response(200, json={"id": case_id, "status": body["status"]})
        if sub == "/status-history" and method == "GET":
            return httpx.Response(200, json=self.status_history.get(case_id, []))
        if sub == "/audit-logs" and method == "GET":
            return httpx.Response(200, json=self.audit_logs.get(case_id, []))

        return httpx.Response(405)


@pytest.fixture
def fake_api():
    """Create in-memory records API."""
    return FakeRecordsApi()


@pytest.fixture
def transport(fake_api):
    """Mock transport routing to the fake records API."""
    return httpx.MockTransport(fake_api.handler)


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from portal.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from portal.tracker import Tracker

    return Tracker(storage=storage)


@pytest_asyncio.fixture
async def records_api(transport):
    """Create a started records API client on the mock transport."""
    from portal.client import RecordsApiClient

    client = RecordsApiClient("http://records.test", transport=transport)
    await client.start()
    yield client
    await client.stop()


@pytest.fixture
def case_service(records_api, tracker):
    """Create CaseService for testing."""
    from portal.services import CaseService

    return CaseService(api=records_api, tracker=tracker)


@pytest.fixture
def analytics_service(records_api, tracker):
    """Create AnalyticsService for testing."""
    from portal.services import AnalyticsService

    return AnalyticsService(api=records_api, tracker=tracker)


def _session(role: str, police_station: str | None = "Shivajinagar"):
    from portal.session import decode_session, issue_dev_token

    token = issue_dev_token(
        user_id=f"{role}-1",
        name=f"{role.title()} User",
        email=f"{role}@example.com",
        role=role,
        policeStation=police_station,
    )
    return decode_session(token)


@pytest.fixture
def admin_session():
    return _session("admin")


@pytest.fixture
def investigator_session():
    return _session("investigator")


@pytest.fixture
def viewer_session():
    return _session("viewer")
