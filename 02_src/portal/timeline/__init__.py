"""Case history timeline module."""

from .builder import (
    EventTimelineBuilder,
    ITimelineBuilder,
    build_timeline,
    parse_filter,
)
from .ingest import (
    parse_audit_event,
    parse_audit_logs,
    parse_status_event,
    parse_status_history,
    parse_timestamp,
)

__all__ = [
    "EventTimelineBuilder",
    "ITimelineBuilder",
    "build_timeline",
    "parse_filter",
    "parse_audit_event",
    "parse_audit_logs",
    "parse_status_event",
    "parse_status_history",
    "parse_timestamp",
]
