"""Application bootstrap and lifecycle management."""

from typing import Protocol

import httpx

from .client import IRecordsApi, RecordsApiClient
from .config import Settings, resolve_db_path
from .logging_config import get_logger
from .services import AnalyticsService, CaseService, ICaseService
from .storage import IStorage, Storage
from .timeline import EventTimelineBuilder
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Clear recorded activity."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        db_path: str | None = None,
        api_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or Settings.from_env()
        self._db_path = resolve_db_path(
            db_path if db_path is not None else self._settings.database_url
        )
        self._api_transport = api_transport

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._records_api: RecordsApiClient | None = None
        self._case_service: CaseService | None = None
        self._analytics_service: AnalyticsService | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Records API client (no internal dependencies)
        self._records_api = RecordsApiClient(
            self._settings.records_api_url,
            timeout=self._settings.records_api_timeout,
            transport=self._api_transport,
        )
        await self._records_api.start()
        logger.info("Records API client ready for %s", self._settings.records_api_url)

        # 4. Services (depend on API client + Tracker)
        self._case_service = CaseService(
            api=self._records_api,
            tracker=self._tracker,
            timeline_builder=EventTimelineBuilder(),
        )
        self._analytics_service = AnalyticsService(
            api=self._records_api, tracker=self._tracker
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._records_api:
            await self._records_api.stop()
            logger.info("Records API client closed")
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Clear recorded activity."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def tracker(self) -> ITracker:
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def records_api(self) -> IRecordsApi:
        if not self._records_api:
            raise RuntimeError("Application not started")
        return self._records_api

    @property
    def case_service(self) -> ICaseService:
        """Get case service instance."""
        if not self._case_service:
            raise RuntimeError("Application not started")
        return self._case_service

    @property
    def analytics_service(self) -> AnalyticsService:
        """Get analytics service instance."""
        if not self._analytics_service:
            raise RuntimeError("Application not started")
        return self._analytics_service
