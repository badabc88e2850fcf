"""Absconders Portal: case management over the records API."""

from .app import Application, IApplication
from .client import IRecordsApi, RecordsApiClient
from .forms import CaseForm
from .models import (
    AuditLogEvent,
    CaseStatus,
    Criminal,
    EntryCategory,
    Role,
    Session,
    StatusChangeEvent,
    TimelineEntry,
    TimelineFilter,
    TimelineResult,
    TraceEvent,
    User,
)
from .services import AnalyticsService, CaseService
from .storage import IStorage, Storage
from .timeline import EventTimelineBuilder, build_timeline
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Timeline
    "EventTimelineBuilder",
    "build_timeline",
    # Models
    "StatusChangeEvent",
    "AuditLogEvent",
    "EntryCategory",
    "TimelineFilter",
    "TimelineEntry",
    "TimelineResult",
    "CaseStatus",
    "Criminal",
    "Role",
    "User",
    "Session",
    "TraceEvent",
    # Components
    "CaseForm",
    "IRecordsApi",
    "RecordsApiClient",
    "CaseService",
    "AnalyticsService",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
]
