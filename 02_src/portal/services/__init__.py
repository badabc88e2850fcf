"""Services module."""

from .analytics_service import AnalyticsService
from .case_service import (
    MIN_SEARCH_LENGTH,
    CaseService,
    ICaseService,
    parse_criminal,
    parse_warrant,
)

__all__ = [
    "AnalyticsService",
    "CaseService",
    "ICaseService",
    "MIN_SEARCH_LENGTH",
    "parse_criminal",
    "parse_warrant",
]
