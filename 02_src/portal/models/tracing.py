"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A record of something a portal user did."""

    id: str
    event_type: str  # e.g. "case_viewed", "status_change_submitted"
    actor: str  # user id, or "portal" for system events
    data: dict  # self-contained data for display
    timestamp: datetime
