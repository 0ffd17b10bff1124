"""
Adobe Target Admin API Client

Gateway to the Target Admin API: IMS token acquisition and uniform resource
fetching for activities, offers and audiences.

References:
    https://developer.adobe.com/target/administer/admin-api/
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from core.config import TargetConfig

from ..models import ActivityType, TargetId
from ..protocols import (
    SpaceContentServiceError,
    TargetAuthenticationError,
    has_error_indicator,
)

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    """Target resources the gateway can fetch, each with its own URL and API version"""
    ACTIVITY = "activity"
    ACTIVITIES = "activities"
    OFFER = "offer"
    OFFERS = "offers"
    AUDIENCE = "audience"
    AUDIENCES = "audiences"

    @property
    def is_listing(self) -> bool:
        return self in (ResourceKind.ACTIVITIES, ResourceKind.OFFERS, ResourceKind.AUDIENCES)

    def api_version(self, subtype: Optional[str] = None) -> str:
        """Media-type version expected by the endpoint"""
        if self is ResourceKind.ACTIVITY and subtype == ActivityType.AUTO_ALLOCATE.value:
            return "v1"
        if self in (ResourceKind.AUDIENCE, ResourceKind.AUDIENCES):
            return "v3"
        return "v2"

    def path(self, resource_id: Optional[TargetId] = None, subtype: Optional[str] = None) -> str:
        """Path below the tenant URL"""
        if self is ResourceKind.ACTIVITY:
            return f"/target/activities/{subtype}/{resource_id}"
        if self is ResourceKind.ACTIVITIES:
            if resource_id is not None:
                return f"/target/activities/?id={resource_id}"
            return f"/target/activities/?state={subtype}" if subtype else "/target/activities/"
        if self is ResourceKind.OFFER:
            return f"/target/offers/{subtype}/{resource_id}"
        if self is ResourceKind.OFFERS:
            return f"/target/offers/?id={resource_id}" if resource_id is not None else "/target/offers/"
        if self is ResourceKind.AUDIENCE:
            return f"/target/audiences/{resource_id}"
        if self is ResourceKind.AUDIENCES:
            return "/target/audiences"
        raise ValueError(f"Unsupported resource kind: {self.value}")


class TargetClient:
    """Client for the Adobe Target Admin API"""

    def __init__(
        self,
        config: TargetConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.client = http_client or httpx.AsyncClient(timeout=config.timeout)

        logger.debug(f"Initialized Target client for tenant '{config.tenant_id}'")

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
        logger.debug("Closed Target client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # Authentication
    # ========================================

    async def generate_token(self) -> str:
        """
        Request an access token with the OAuth client_credentials grant.

        Returns:
            Bearer token for the Admin API

        Raises:
            TargetAuthenticationError: IMS answered without an access token
        """
        response = await self.client.post(
            self.config.ims_token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "scope": self.config.api_scope,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        token_data = response.json()
        if not isinstance(token_data, dict):
            token_data = {}
        token = token_data.get("access_token")

        if not token:
            error = token_data.get("error_description") or token_data.get("error")
            logger.error(f"IMS token request failed ({response.status_code}): {error}")
            raise TargetAuthenticationError(f"Could not obtain Target access token: {error or 'no access_token'}")

        return token

    # ========================================
    # Resource fetching
    # ========================================

    def build_url(
        self,
        kind: ResourceKind,
        resource_id: Optional[TargetId] = None,
        subtype: Optional[str] = None,
    ) -> str:
        return f"{self.config.tenant_url}{kind.path(resource_id, subtype)}"

    def build_headers(self, token: str, version: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "X-Api-Key": self.config.api_key,
            "Accept": f"application/vnd.adobe.target.{version}+json",
        }

    async def fetch(
        self,
        kind: ResourceKind,
        token: str,
        resource_id: Optional[TargetId] = None,
        subtype: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch a Target resource.

        The JSON body is returned whatever the HTTP status, Target error
        bodies carry ``error_code`` or ``errors`` for callers to inspect.

        Args:
            kind: Resource kind
            token: Bearer token from generate_token()
            resource_id: Resource ID (single resources, filtered listings)
            subtype: Activity/offer type, or listing state filter

        Returns:
            Decoded JSON body
        """
        url = self.build_url(kind, resource_id, subtype)
        headers = self.build_headers(token, kind.api_version(subtype))

        logger.debug(f"GET {url}")
        response = await self.client.get(url, headers=headers)

        if response.status_code >= 400:
            logger.warning(f"Target {kind.value} {resource_id or ''} answered {response.status_code}")

        return response.json()

    async def fetch_listing(
        self,
        kind: ResourceKind,
        token: str,
        subtype: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch a listing and unwrap its collection field.

        Raises:
            SpaceContentServiceError: the listing answered with an error payload
        """
        if not kind.is_listing:
            raise ValueError(f"{kind.value} is not a listing resource")

        payload = await self.fetch(kind, token, subtype=subtype)

        if has_error_indicator(payload):
            logger.error(f"Target {kind.value} listing failed: {payload}")
            raise SpaceContentServiceError(f"Target {kind.value} listing failed")

        return payload.get(kind.value) or []


__all__ = ["ResourceKind", "TargetClient"]
