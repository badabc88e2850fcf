"""Case history timeline assembly.

Merges status transitions and audit log records into one chronological,
filterable list of renderable entries. Pure: no I/O, inputs are never
mutated, and equal inputs give structurally equal results.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from ..errors import InvalidFilterError, MalformedInputError
from ..models import (
    AuditLogEvent,
    CaseEvent,
    EntryCategory,
    StatusChangeEvent,
    TimelineEntry,
    TimelineFilter,
    TimelineResult,
)

UNKNOWN_ACTOR = "Unknown"

STATUS_FALLBACK = "Status changed"
UPDATE_FALLBACK = "Updated case record"
VIEW_MESSAGE = "Viewed case details"
CREATE_MESSAGE = "Created case record"
UNKNOWN_MESSAGE = "Unknown event"

_AUDIT_CATEGORIES = {
    "create": EntryCategory.CREATE,
    "update": EntryCategory.UPDATE,
    "view": EntryCategory.VIEW,
}

_FILTER_CATEGORIES = {
    TimelineFilter.STATUS: EntryCategory.STATUS,
    TimelineFilter.EDIT: EntryCategory.UPDATE,
    TimelineFilter.VIEW: EntryCategory.VIEW,
}


def parse_filter(value: TimelineFilter | str) -> TimelineFilter:
    """Coerce a filter selector, rejecting unrecognized values."""
    try:
        return TimelineFilter(value)
    except ValueError:
        raise InvalidFilterError(
            f"Unknown timeline filter {value!r}; "
            f"expected one of {', '.join(f.value for f in TimelineFilter)}"
        ) from None


def _actor(name: str | None) -> str:
    if name is None or not str(name).strip():
        return UNKNOWN_ACTOR
    return name


def _status_message(event: StatusChangeEvent) -> str:
    if not event.previous_status or not event.new_status:
        return STATUS_FALLBACK
    message = f"Status changed from {event.previous_status} to {event.new_status}"
    if event.notes and event.notes.strip():
        message += f"\nNote: {event.notes}"
    return message


def _update_message(event: AuditLogEvent) -> str:
    if event.field is None or event.previous_value is None or event.new_value is None:
        return UPDATE_FALLBACK
    return (
        f'Updated {event.field} from "{event.previous_value}" '
        f'to "{event.new_value}"'
    )


def _check_collection(events, expected: type, name: str) -> None:
    if not isinstance(events, (list, tuple)):
        raise MalformedInputError(
            f"{name} must be a list, got {type(events).__name__}"
        )
    for index, event in enumerate(events):
        if not isinstance(event, expected):
            raise MalformedInputError(
                f"{name}[{index}] must be {expected.__name__}, "
                f"got {type(event).__name__}"
            )


class ITimelineBuilder(Protocol):
    """Builds the case history timeline."""

    def build(
        self,
        status_events: Sequence[StatusChangeEvent],
        audit_events: Sequence[AuditLogEvent],
        filter: TimelineFilter | str = TimelineFilter.ALL,
    ) -> TimelineResult:
        """Merge, order, filter and render both event collections."""
        ...


class EventTimelineBuilder:
    """Merges status changes and audit logs into timeline entries.

    Ordering is most recent first. Entries with equal timestamps keep the
    order of the concatenated input (status events first, then audit
    events, each as supplied). Entries without a usable timestamp go last.
    """

    def build(
        self,
        status_events: Sequence[StatusChangeEvent],
        audit_events: Sequence[AuditLogEvent],
        filter: TimelineFilter | str = TimelineFilter.ALL,
    ) -> TimelineResult:
        """Merge, order, filter and render both event collections.

        Raises:
            MalformedInputError: If either collection is not a list of events.
            InvalidFilterError: If ``filter`` is not a known selector.
        """
        _check_collection(status_events, StatusChangeEvent, "status_events")
        _check_collection(audit_events, AuditLogEvent, "audit_events")
        selected = parse_filter(filter)

        entries = self.merge(status_events, audit_events)
        return TimelineResult(filter=selected, entries=self.apply_filter(entries, selected))

    def merge(
        self,
        status_events: Sequence[StatusChangeEvent],
        audit_events: Sequence[AuditLogEvent],
    ) -> list[TimelineEntry]:
        """Render every event and sort the result, without filtering."""
        rendered = [self.to_entry(e) for e in [*status_events, *audit_events]]
        # sorted() stays stable under reverse=True
        return sorted(rendered, key=_sort_key, reverse=True)

    @staticmethod
    def apply_filter(
        entries: Sequence[TimelineEntry],
        filter: TimelineFilter | str,
    ) -> list[TimelineEntry]:
        """Keep the entries the selector shows."""
        selected = parse_filter(filter)
        if selected is TimelineFilter.ALL:
            return list(entries)
        category = _FILTER_CATEGORIES[selected]
        return [e for e in entries if e.category is category]

    @staticmethod
    def to_entry(event: CaseEvent) -> TimelineEntry:
        """Map one event to its renderable entry."""
        if isinstance(event, StatusChangeEvent):
            return TimelineEntry(
                id=event.id,
                timestamp=event.timestamp,
                category=EntryCategory.STATUS,
                actor_name=_actor(event.changed_by_name),
                rendered_message=_status_message(event),
            )

        category = _AUDIT_CATEGORIES.get(event.action or "", EntryCategory.UNKNOWN)
        if category is EntryCategory.UPDATE:
            message = _update_message(event)
        elif category is EntryCategory.VIEW:
            message = VIEW_MESSAGE
        elif category is EntryCategory.CREATE:
            message = CREATE_MESSAGE
        else:
            message = UNKNOWN_MESSAGE

        return TimelineEntry(
            id=event.id,
            timestamp=event.timestamp,
            category=category,
            actor_name=_actor(event.performed_by_name),
            rendered_message=message,
        )


def _sort_key(entry: TimelineEntry) -> tuple[bool, float]:
    ts: datetime | None = entry.timestamp
    if ts is None:
        return (False, 0.0)
    return (True, ts.timestamp())


def build_timeline(
    status_events: Sequence[StatusChangeEvent],
    audit_events: Sequence[AuditLogEvent],
    filter: TimelineFilter | str = TimelineFilter.ALL,
) -> TimelineResult:
    """Shortcut for ``EventTimelineBuilder().build(...)``."""
    return EventTimelineBuilder().build(status_events, audit_events, filter)
