"""Exception hierarchy for the portal."""


class PortalError(Exception):
    """Base class for all portal errors."""


# Timeline


class MalformedInputError(PortalError, TypeError):
    """An event collection is not a list of records."""


class InvalidFilterError(PortalError, ValueError):
    """Timeline filter selector outside all/status/edit/view."""


# Session / access


class InvalidSessionError(PortalError):
    """Token is missing, undecodable or lacks required claims."""


class PermissionDeniedError(PortalError):
    """The session's role does not allow the requested action."""


# Input validation


class ValidationError(PortalError, ValueError):
    """User input failed validation.

    ``errors`` maps field names to human-readable messages.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


# Records API


class RecordsApiError(PortalError):
    """Records API answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ApiUnavailableError(RecordsApiError):
    """Records API could not be reached."""


class SessionExpiredError(RecordsApiError):
    """Records API rejected the bearer token (401)."""


class NotFoundError(RecordsApiError):
    """Requested record does not exist (404)."""


class PayloadTooLargeError(RecordsApiError):
    """Uploaded files exceed the records API limit (413)."""
