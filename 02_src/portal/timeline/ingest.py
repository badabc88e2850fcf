"""Turn raw records API payloads into typed case events.

Each collection is classified once, by where it came from: the status
history endpoint yields ``StatusChangeEvent``s and the audit log endpoint
yields ``AuditLogEvent``s. Nothing downstream inspects record keys again.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from ..errors import MalformedInputError
from ..logging_config import get_logger
from ..models import AuditLogEvent, StatusChangeEvent

logger = get_logger(__name__)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an API timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), ISO-8601 strings
    (including a trailing ``Z``) and epoch milliseconds. Anything else
    yields None.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    return None


def _record_id(raw: Mapping) -> str:
    value = raw.get("id", raw.get("_id"))
    return "" if value is None else str(value)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _require_list(raw: Any, name: str) -> None:
    if not isinstance(raw, (list, tuple)):
        raise MalformedInputError(
            f"{name} must be a list of records, got {type(raw).__name__}"
        )
    for index, item in enumerate(raw):
        if not isinstance(item, Mapping):
            raise MalformedInputError(
                f"{name}[{index}] must be a record, got {type(item).__name__}"
            )


def parse_status_event(raw: Mapping) -> StatusChangeEvent:
    """Build a StatusChangeEvent from one status history record."""
    event = StatusChangeEvent(
        id=_record_id(raw),
        timestamp=parse_timestamp(raw.get("timestamp")),
        previous_status=_text(raw.get("previousStatus")),
        new_status=_text(raw.get("newStatus")),
        changed_by_name=_text(raw.get("changedByName")),
        notes=_text(raw.get("notes")),
    )

    missing = [
        name
        for name, value in (
            ("id", event.id),
            ("timestamp", event.timestamp),
            ("previousStatus", event.previous_status),
            ("newStatus", event.new_status),
        )
        if not value
    ]
    if missing:
        logger.warning(
            "Status history record %r is missing %s",
            event.id,
            ", ".join(missing),
        )
    return event


def parse_audit_event(raw: Mapping) -> AuditLogEvent:
    """Build an AuditLogEvent from one audit log record."""
    event = AuditLogEvent(
        id=_record_id(raw),
        timestamp=parse_timestamp(raw.get("timestamp")),
        action=_text(raw.get("action")),
        performed_by_name=_text(raw.get("performedByName")),
        field=_text(raw.get("field")),
        previous_value=raw.get("previousValue"),
        new_value=raw.get("newValue"),
    )

    if not event.id or event.timestamp is None or not event.action:
        logger.warning("Audit log record %r is incomplete", event.id)
    return event


def parse_status_history(raw: Any) -> list[StatusChangeEvent]:
    """Parse the status history collection.

    Raises:
        MalformedInputError: If ``raw`` is not a list of records.
    """
    _require_list(raw, "status history")
    return [parse_status_event(item) for item in raw]


def parse_audit_logs(raw: Any) -> list[AuditLogEvent]:
    """Parse the audit log collection.

    Raises:
        MalformedInputError: If ``raw`` is not a list of records.
    """
    _require_list(raw, "audit logs")
    return [parse_audit_event(item) for item in raw]
