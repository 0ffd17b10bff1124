"""
Space Content Service Data Models

Pydantic models for the Adobe Target resources consumed by the service and
for the denormalized space content it returns.

Every model keeps the Target wire names (camelCase aliases), preserves fields
it does not declare, and is frozen: derived values are carried by new records,
never written back onto the ones fetched from the API.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


TargetId = Union[int, str]

ALL_VISITORS = "ALL VISITORS"
AUDIENCE_NOT_FOUND = "AUDIENCE NOT FOUND"
WHEN_ACTIVATED = "when activated"
WHEN_DEACTIVATED = "when deactivated"
NOT_AVAILABLE = "N/A"


# =============================================================================
# ENUMS
# =============================================================================

class ScheduleStatus(str, Enum):
    """Schedule state derived from start/end dates"""
    LIVE = "live"
    SCHEDULED = "scheduled"
    EXPIRED = "expired"


class ActivityType(str, Enum):
    """Activity types that change how an activity is merged or fetched"""
    EXPERIENCE_TARGETING = "xt"
    AUTO_ALLOCATE = "autoallocate"


# =============================================================================
# BASE MODEL
# =============================================================================

class TargetContract(BaseModel):
    """Base model for Target resources"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Dump with Target field names, keeping only fields that were given"""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


# =============================================================================
# TARGET INPUT MODELS
# =============================================================================

class Lifetime(TargetContract):
    start: Optional[str] = None
    end: Optional[str] = None


class ActivityOverview(TargetContract):
    """Entry of the approved activities listing"""
    id: TargetId
    name: str = ""
    type: str = ""
    starts_at: Optional[str] = None
    ends_at: Optional[str] = None
    lifetime: Optional[Lifetime] = None


class SelectedActivity(ActivityOverview):
    """Activity overview that matched a space, with its schedule resolved"""
    scheduling: ScheduleStatus


class OptionLocation(TargetContract):
    option_local_id: TargetId
    location_local_id: Optional[TargetId] = None


class Experience(TargetContract):
    experience_local_id: TargetId
    name: str = ""
    audience_ids: List[TargetId] = Field(default_factory=list)
    option_locations: List[OptionLocation] = Field(default_factory=list)
    visitor_percentage: Optional[Union[int, float]] = None


class Location(TargetContract):
    """mbox location of an activity"""
    location_local_id: TargetId
    name: str = ""
    audience_ids: List[TargetId] = Field(default_factory=list)


class ActivityLocations(TargetContract):
    mboxes: List[Location] = Field(default_factory=list)


class Option(TargetContract):
    option_local_id: TargetId
    offer_id: Optional[TargetId] = None


class ActivityDetail(TargetContract):
    """Full detail graph of one activity"""
    experiences: List[Experience] = Field(default_factory=list)
    locations: ActivityLocations = Field(default_factory=ActivityLocations)
    options: List[Option] = Field(default_factory=list)
    priority: int = 0
    starts_at: Optional[str] = None
    ends_at: Optional[str] = None


class Audience(TargetContract):
    id: TargetId
    name: Optional[str] = None
    type: Optional[str] = None


class OfferOverview(TargetContract):
    id: TargetId
    type: str


class OfferDetail(TargetContract):
    id: TargetId
    content: Any = None


# =============================================================================
# ENRICHMENT MODELS
# =============================================================================

class AudienceDetails(TargetContract):
    name: str
    id: Optional[TargetId] = None


class Ordination(TargetContract):
    priority: int
    position: int


class ExperienceSummary(TargetContract):
    """Reduced experience projection attached to each option"""
    experience_local_id: TargetId
    name: str
    audience_ids: List[TargetId]
    mbox: Optional[Location] = None


class ScheduleSnapshot(TargetContract):
    status: ScheduleStatus
    starts_at: str
    ends_at: str


class TypeTag(TargetContract):
    activity: str
    offer: str


class OfferContent(TargetContract):
    id: TargetId
    content: Any = None


class EnrichedOption(Option):
    """Option joined with its experience, audience, schedule and offer"""
    audience_details: Optional[AudienceDetails] = None
    ordination: Optional[Ordination] = None
    experience: Optional[ExperienceSummary] = None
    visitor_percentage: Optional[Union[int, float, str]] = None
    scheduling: Optional[ScheduleSnapshot] = None
    type: Optional[TypeTag] = None
    offer_details: Optional[OfferContent] = None


class SpaceContentEntry(TargetContract):
    """One activity of a space with its resolved options"""
    type: str
    scheduling: ScheduleStatus
    priority: int = 0
    starts_at: str
    ends_at: str
    options: List[EnrichedOption] = Field(default_factory=list)


# =============================================================================
# SERVICE MODELS
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    port: int
    version: str
    dependencies: Dict[str, str] = Field(default_factory=dict)


class ReadinessResponse(BaseModel):
    """Readiness check response"""
    ready: bool
    checks: Dict[str, bool] = Field(default_factory=dict)
    details: Dict[str, str] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    """Liveness check response"""
    alive: bool
    uptime_seconds: float


class ServiceInfoResponse(BaseModel):
    """Service metadata"""
    service: str
    version: str
    description: str
    capabilities: List[str]
    routes: List[Dict[str, Any]]
    timestamp: datetime


__all__ = [
    "TargetId",
    "ALL_VISITORS",
    "AUDIENCE_NOT_FOUND",
    "WHEN_ACTIVATED",
    "WHEN_DEACTIVATED",
    "NOT_AVAILABLE",
    "ScheduleStatus",
    "ActivityType",
    "TargetContract",
    "Lifetime",
    "ActivityOverview",
    "SelectedActivity",
    "OptionLocation",
    "Experience",
    "Location",
    "ActivityLocations",
    "Option",
    "ActivityDetail",
    "Audience",
    "OfferOverview",
    "OfferDetail",
    "AudienceDetails",
    "Ordination",
    "ExperienceSummary",
    "ScheduleSnapshot",
    "TypeTag",
    "OfferContent",
    "EnrichedOption",
    "SpaceContentEntry",
    "HealthResponse",
    "ReadinessResponse",
    "LivenessResponse",
    "ServiceInfoResponse",
]
