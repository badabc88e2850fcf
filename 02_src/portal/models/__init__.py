"""Core data models for the Absconders Portal."""

from .analytics import (
    ChartData,
    ChartDataset,
    DashboardStats,
    RecentActivity,
    StatCard,
)
from .cases import CaseImage, CaseStatus, Criminal, IdProof, Warrant
from .events import (
    AuditLogEvent,
    CaseEvent,
    EntryCategory,
    StatusChangeEvent,
    TimelineEntry,
    TimelineFilter,
    TimelineResult,
)
from .session import Role, Session, User
from .tracing import TraceEvent

__all__ = [
    # Events
    "StatusChangeEvent",
    "AuditLogEvent",
    "CaseEvent",
    "EntryCategory",
    "TimelineFilter",
    "TimelineEntry",
    "TimelineResult",
    # Cases
    "CaseStatus",
    "Criminal",
    "IdProof",
    "Warrant",
    "CaseImage",
    # Session
    "Role",
    "User",
    "Session",
    # Analytics
    "DashboardStats",
    "StatCard",
    "RecentActivity",
    "ChartData",
    "ChartDataset",
    # Tracing
    "TraceEvent",
]
