"""
Component Test Fixtures for Space Content Service

Provides an in-memory Target gateway and the service/API fixtures built on it.
Uses FastAPI TestClient for API testing.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch
from typing import Any, Dict, List, Optional, Tuple
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from fastapi.testclient import TestClient

from microservices.space_content_service.clients.target_client import ResourceKind
from microservices.space_content_service.space_content_service import SpaceContentService
from tests.contracts.space_content.data_contract import SpaceContentTestDataFactory


FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# ====================
# Mock Gateway
# ====================


class MockTargetGateway:
    """In-memory stand-in for TargetClient"""

    def __init__(self):
        self.activities: List[Dict[str, Any]] = []
        self.audiences: List[Dict[str, Any]] = []
        self.offers: List[Dict[str, Any]] = []
        self.details: Dict[Tuple[str, Any], Dict[str, Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.token = "test-token"
        self.closed = False
        self._errors: Dict[Tuple[str, Any], Exception] = {}
        self._factory = SpaceContentTestDataFactory()

    async def generate_token(self) -> str:
        self.calls.append({"method": "generate_token"})
        error = self._errors.get(("token", None))
        if error:
            raise error
        return self.token

    async def fetch(
        self,
        kind: ResourceKind,
        token: str,
        resource_id: Optional[Any] = None,
        subtype: Optional[str] = None,
    ) -> Dict[str, Any]:
        self.calls.append(
            {"method": "fetch", "kind": kind, "token": token, "resource_id": resource_id, "subtype": subtype}
        )
        error = self._errors.get((kind.value, resource_id))
        if error:
            raise error
        payload = self.details.get((kind.value, resource_id))
        if payload is None:
            return self._factory.make_error_payload(message=f"{kind.value} {resource_id} not found")
        return payload

    async def fetch_listing(
        self,
        kind: ResourceKind,
        token: str,
        subtype: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        self.calls.append({"method": "fetch_listing", "kind": kind, "token": token, "subtype": subtype})
        error = self._errors.get((kind.value, None))
        if error:
            raise error
        return {
            ResourceKind.ACTIVITIES: self.activities,
            ResourceKind.AUDIENCES: self.audiences,
            ResourceKind.OFFERS: self.offers,
        }[kind]

    async def close(self) -> None:
        self.closed = True

    # Test helper methods

    def add_activity(self, scenario: Dict[str, Dict[str, Any]], with_offer: bool = True):
        """Register a scenario from SpaceContentTestDataFactory.make_single_option_activity"""
        overview = scenario["overview"]
        self.activities.append(overview)
        self.details[(ResourceKind.ACTIVITY.value, overview["id"])] = scenario["detail"]
        if with_offer:
            self.add_offer(scenario["offer"], scenario["offer_detail"])

    def add_audience(self, audience: Dict[str, Any]):
        self.audiences.append(audience)

    def add_offer(self, offer: Dict[str, Any], offer_detail: Optional[Dict[str, Any]] = None):
        self.offers.append(offer)
        if offer_detail is not None:
            self.details[(ResourceKind.OFFER.value, offer["id"])] = offer_detail

    def fail_resource(self, kind: ResourceKind, resource_id: Any, payload: Optional[Dict[str, Any]] = None):
        """Answer a resource with a Target error body"""
        self.details[(kind.value, resource_id)] = payload or self._factory.make_error_payload()

    def set_error(self, kind: Optional[ResourceKind], error: Exception, resource_id: Any = None):
        """Raise on a resource, a listing (resource_id None) or the token call (kind None)"""
        self._errors[(kind.value if kind else "token", resource_id)] = error

    def get_calls(self, method: str, kind: Optional[ResourceKind] = None) -> List[Dict[str, Any]]:
        return [
            call for call in self.calls
            if call["method"] == method and (kind is None or call.get("kind") == kind)
        ]


# ====================
# Fixtures
# ====================


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def mock_gateway() -> MockTargetGateway:
    return MockTargetGateway()


@pytest.fixture
def service(mock_gateway) -> SpaceContentService:
    return SpaceContentService(gateway=mock_gateway)


@pytest.fixture
def client(service):
    """FastAPI TestClient over the service, lifespan not run"""
    from microservices.space_content_service.main import app

    factory = MagicMock()
    factory.service = service
    with patch("microservices.space_content_service.main.factory", factory):
        yield TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def uninitialized_client():
    """FastAPI TestClient with no service factory"""
    from microservices.space_content_service.main import app

    with patch("microservices.space_content_service.main.factory", None):
        yield TestClient(app, raise_server_exceptions=False)
