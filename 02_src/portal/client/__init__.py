"""Records API client module."""

from .records_api import IRecordsApi, RecordsApiClient, TrendPeriod

__all__ = ["IRecordsApi", "RecordsApiClient", "TrendPeriod"]
