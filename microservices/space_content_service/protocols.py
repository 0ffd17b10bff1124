"""
Space Content Service Protocols

Defines interfaces for dependency injection and testing.
Following the protocol-based architecture pattern.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol

from .models import TargetId

if TYPE_CHECKING:
    from .clients.target_client import ResourceKind


# ====================
# Gateway Protocol
# ====================


class TargetGatewayProtocol(Protocol):
    """Protocol for the Adobe Target Admin API gateway"""

    async def generate_token(self) -> str:
        """Acquire an access token"""
        ...

    async def fetch(
        self,
        kind: "ResourceKind",
        token: str,
        resource_id: Optional[TargetId] = None,
        subtype: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Fetch one resource or listing and return its JSON body"""
        ...

    async def fetch_listing(
        self,
        kind: "ResourceKind",
        token: str,
        subtype: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch a listing and return its collection"""
        ...

    async def close(self) -> None:
        """Release the HTTP client"""
        ...


# ====================
# Custom Exceptions
# ====================


class SpaceContentServiceError(Exception):
    """Base exception for space content service errors"""
    pass


class TargetAuthenticationError(SpaceContentServiceError):
    """Raised when no access token could be obtained"""
    pass


class UpstreamFetchError(SpaceContentServiceError):
    """Raised when a Target resource answers with an error payload"""

    def __init__(
        self,
        message: str,
        resource_id: Optional[TargetId] = None,
        resource_type: Optional[str] = None,
        error_info: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.resource_id = resource_id
        self.resource_type = resource_type
        self.error_info = error_info or {}

    def to_record(self) -> Dict[str, Any]:
        """Error record naming the failing resource"""
        record = {"message": str(self), **self.error_info}
        record["id"] = self.resource_id
        record["type"] = self.resource_type
        return record


class UpstreamBatchError(SpaceContentServiceError):
    """Raised once a fan-out batch finished with at least one upstream failure"""

    def __init__(self, errors: List[UpstreamFetchError]):
        super().__init__(f"{len(errors)} upstream fetch(es) failed")
        self.errors = errors

    @property
    def records(self) -> List[Dict[str, Any]]:
        return [error.to_record() for error in self.errors]


def has_error_indicator(payload: Any) -> bool:
    """True when a Target response body carries an error payload"""
    return isinstance(payload, dict) and bool(payload.get("error_code") or payload.get("errors"))


__all__ = [
    "TargetGatewayProtocol",
    "SpaceContentServiceError",
    "TargetAuthenticationError",
    "UpstreamFetchError",
    "UpstreamBatchError",
    "has_error_indicator",
]
