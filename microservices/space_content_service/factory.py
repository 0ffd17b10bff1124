"""
Space Content Service Factory

Factory for creating space content service instances with proper dependency injection.
"""

import logging
from typing import Optional

from core.config import SpaceSettings, get_settings

from .clients.target_client import TargetClient
from .space_content_service import SpaceContentService

logger = logging.getLogger(__name__)


class SpaceContentServiceFactory:
    """Factory for creating space content service components"""

    def __init__(self, settings: Optional[SpaceSettings] = None):
        self.settings = settings or get_settings()
        self._target_client: Optional[TargetClient] = None
        self._service: Optional[SpaceContentService] = None

    async def initialize(self) -> None:
        """Initialize all components"""
        logger.info("Initializing Space Content Service components...")

        if not self.settings.target.is_configured:
            logger.warning("Target credentials incomplete (API_KEY, TENANT_ID, CLIENT_ID, CLIENT_SECRET)")

        self._target_client = TargetClient(self.settings.target)
        self._service = SpaceContentService(gateway=self._target_client)

        logger.info("Space Content Service components initialized")

    async def close(self) -> None:
        """Close all components"""
        logger.info("Closing Space Content Service components...")

        if self._target_client:
            await self._target_client.close()
            self._target_client = None

        logger.info("Space Content Service components closed")

    @property
    def service(self) -> SpaceContentService:
        """Get space content service"""
        if not self._service:
            raise RuntimeError("Factory not initialized. Call initialize() first.")
        return self._service

    @property
    def target_client(self) -> TargetClient:
        """Get Target API client"""
        if not self._target_client:
            raise RuntimeError("Factory not initialized. Call initialize() first.")
        return self._target_client


__all__ = ["SpaceContentServiceFactory"]
