"""Session module."""

from .auth import (
    can_change_status,
    can_edit_case,
    can_view_activity,
    can_view_analytics,
    can_view_case,
    decode_session,
    issue_dev_token,
    permissions,
    require,
    session_from_header,
)

__all__ = [
    "can_change_status",
    "can_edit_case",
    "can_view_activity",
    "can_view_analytics",
    "can_view_case",
    "decode_session",
    "issue_dev_token",
    "permissions",
    "require",
    "session_from_header",
]
