"""Case history event models and the derived timeline entries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class EntryCategory(str, Enum):
    """Category of a rendered timeline entry."""

    STATUS = "status"
    UPDATE = "update"
    VIEW = "view"
    CREATE = "create"
    UNKNOWN = "unknown"


class TimelineFilter(str, Enum):
    """Filter selector offered by the case history view."""

    ALL = "all"
    STATUS = "status"
    EDIT = "edit"
    VIEW = "view"


@dataclass
class StatusChangeEvent:
    """A case status transition recorded by the records API."""

    id: str
    timestamp: datetime | None
    previous_status: str | None
    new_status: str | None
    changed_by_name: str | None = None
    notes: str | None = None


@dataclass
class AuditLogEvent:
    """A user action (create/update/view) taken against a case."""

    id: str
    timestamp: datetime | None
    action: str | None
    performed_by_name: str | None = None
    field: str | None = None
    previous_value: Any = None
    new_value: Any = None


# Tagged variant: the concrete class is the tag, fixed at ingestion.
CaseEvent = Union[StatusChangeEvent, AuditLogEvent]


# Icon and accent color per category, as shown by the history view.
PRESENTATION: dict[EntryCategory, tuple[str, str]] = {
    EntryCategory.STATUS: ("alert-circle", "blue"),
    EntryCategory.UPDATE: ("edit", "amber"),
    EntryCategory.VIEW: ("eye", "gray"),
    EntryCategory.CREATE: ("file-text", "gray"),
    EntryCategory.UNKNOWN: ("file-text", "gray"),
}


@dataclass(frozen=True)
class TimelineEntry:
    """A renderable row of the case history timeline."""

    id: str
    timestamp: datetime | None
    category: EntryCategory
    actor_name: str
    rendered_message: str

    @property
    def icon(self) -> str:
        return PRESENTATION[self.category][0]

    @property
    def color(self) -> str:
        return PRESENTATION[self.category][1]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "category": self.category.value,
            "actor_name": self.actor_name,
            "rendered_message": self.rendered_message,
            "icon": self.icon,
            "color": self.color,
        }


@dataclass
class TimelineResult:
    """Ordered, filtered timeline plus the explicit "no entries" signal."""

    filter: TimelineFilter
    entries: list[TimelineEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def __len__(self) -> int:
        return len(self.entries)
