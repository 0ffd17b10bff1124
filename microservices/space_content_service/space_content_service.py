"""
Space Content Service Business Logic

Joins Target activities, audiences and offers into the ordered list of
campaign entries running on one content space.

Flow of a request:
    1. Listings (approved activities, audiences, offers) fetched once
    2. Activities selected by space name and schedule
    3. Each activity's detail graph fetched and merged into enriched options
    4. Each option's offer content fetched and attached
    5. Entries ordered by effective date, then priority
"""

import asyncio
import logging
import math
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .clients.target_client import ResourceKind
from .models import (
    ALL_VISITORS,
    AUDIENCE_NOT_FOUND,
    NOT_AVAILABLE,
    WHEN_ACTIVATED,
    WHEN_DEACTIVATED,
    ActivityDetail,
    ActivityOverview,
    ActivityType,
    Audience,
    AudienceDetails,
    EnrichedOption,
    Experience,
    ExperienceSummary,
    Location,
    OfferContent,
    OfferDetail,
    OfferOverview,
    Ordination,
    ScheduleSnapshot,
    ScheduleStatus,
    SelectedActivity,
    SpaceContentEntry,
    TargetId,
    TypeTag,
)
from .protocols import (
    TargetGatewayProtocol,
    UpstreamBatchError,
    UpstreamFetchError,
    has_error_indicator,
)
from .scheduling import effective_date, resolve_schedule

logger = logging.getLogger(__name__)

APPROVED_STATE = "approved"


# ====================
# Activity selection
# ====================


def normalize_space_name(name: Optional[str]) -> str:
    """Lowercase and strip every whitespace character"""
    return re.sub(r"\s+", "", name or "").lower()


def activity_subtype(activity_type: str) -> str:
    """Activity type as used in detail URLs (auto_allocate -> autoallocate)"""
    return (activity_type or "").replace("_", "").lower()


def select_activities(
    activities: Iterable[ActivityOverview],
    requested_space: str,
    now: Optional[datetime] = None,
) -> List[SelectedActivity]:
    """
    Pick the non-expired activities whose name contains the space token.

    A blank space name selects nothing.

    The overviews are left untouched; each match is returned as a new
    SelectedActivity carrying its schedule status and resolved dates.
    """
    space_token = normalize_space_name(requested_space)
    if not space_token:
        return []

    selected = []

    for activity in activities:
        if space_token not in normalize_space_name(activity.name):
            continue

        scheduling, starts_at, ends_at = resolve_schedule(activity, now)
        if scheduling == ScheduleStatus.EXPIRED:
            continue

        selected.append(
            SelectedActivity.model_validate(
                {
                    **activity.to_wire(),
                    "scheduling": scheduling,
                    "startsAt": starts_at,
                    "endsAt": ends_at,
                }
            )
        )

    return selected


# ====================
# Activity detail merge
# ====================


def resolve_audience(
    audience_ids: Sequence[TargetId],
    audiences: Iterable[Audience],
) -> AudienceDetails:
    """Name the audience an option targets (only the first id counts)"""
    if not audience_ids:
        return AudienceDetails(name=ALL_VISITORS, id=None)

    audience_id = audience_ids[0]
    audience = next((a for a in audiences if a.id == audience_id), None)
    if audience is None:
        return AudienceDetails(name=AUDIENCE_NOT_FOUND, id=audience_id)

    return AudienceDetails(name=audience.name or audience.type or "", id=audience_id)


def find_experience_mbox(experience: Experience, mboxes: Sequence[Location]) -> Optional[Location]:
    """First mbox bound to any of the experience's option locations"""
    location_ids = {ol.location_local_id for ol in experience.option_locations}
    return next((mbox for mbox in mboxes if mbox.location_local_id in location_ids), None)


def _option_position(option: EnrichedOption) -> float:
    # options without an experience go last
    return option.ordination.position if option.ordination else math.inf


def merge_activity(
    detail: ActivityDetail,
    activity: SelectedActivity,
    audiences: Sequence[Audience],
) -> SpaceContentEntry:
    """
    Join an activity's experiences, mboxes and options.

    Experiences are numbered 1..N in the order Target lists them; that number
    becomes the position of every option they serve. Options without an
    experience pass through unchanged and are placed after the others.
    """
    mboxes = detail.locations.mboxes
    positioned: List[Tuple[int, Experience, Optional[Location]]] = [
        (position, experience, find_experience_mbox(experience, mboxes))
        for position, experience in enumerate(detail.experiences, start=1)
    ]
    targets_experiences = activity_subtype(activity.type) == ActivityType.EXPERIENCE_TARGETING.value

    options = []
    for option in detail.options:
        match = next(
            (
                entry
                for entry in positioned
                if any(ol.option_local_id == option.option_local_id for ol in entry[1].option_locations)
            ),
            None,
        )

        if match is None:
            options.append(EnrichedOption.model_validate(option.to_wire()))
            continue

        position, experience, mbox = match
        if targets_experiences:
            audience_ids = experience.audience_ids
        else:
            audience_ids = mbox.audience_ids if mbox else []

        options.append(
            EnrichedOption.model_validate(
                {
                    **option.to_wire(),
                    "audienceDetails": resolve_audience(audience_ids, audiences),
                    "ordination": Ordination(priority=detail.priority, position=position),
                    "experience": ExperienceSummary(
                        experience_local_id=experience.experience_local_id,
                        name=experience.name,
                        audience_ids=experience.audience_ids,
                        mbox=mbox,
                    ),
                    "visitorPercentage": (
                        experience.visitor_percentage
                        if experience.visitor_percentage is not None
                        else NOT_AVAILABLE
                    ),
                }
            )
        )

    options.sort(key=_option_position)

    fields = detail.to_wire()
    fields.pop("locations", None)
    fields.pop("experiences", None)
    fields.setdefault("id", activity.id)
    fields.setdefault("name", activity.name)
    fields.update(
        {
            "type": activity.type,
            "scheduling": activity.scheduling,
            "priority": detail.priority,
            "startsAt": detail.starts_at or activity.starts_at or WHEN_ACTIVATED,
            "endsAt": detail.ends_at or activity.ends_at or WHEN_DEACTIVATED,
            "options": options,
        }
    )
    return SpaceContentEntry.model_validate(fields)


# ====================
# Ordering
# ====================


def sort_space_content(entries: Sequence[SpaceContentEntry]) -> List[SpaceContentEntry]:
    """
    Order entries by effective date, then priority (highest first).

    Entries equal on both keep their incoming order.
    """
    def sort_key(indexed: Tuple[int, SpaceContentEntry]):
        index, entry = indexed
        return (effective_date(entry.starts_at, entry.ends_at).sort_key(), -entry.priority, index)

    return [entry for _, entry in sorted(enumerate(entries), key=sort_key)]


# ====================
# Service
# ====================


class SpaceContentService:
    """Space content aggregation over the Target Admin API"""

    def __init__(self, gateway: TargetGatewayProtocol):
        self.gateway = gateway

    async def get_space_content(
        self,
        space_name: str,
        now: Optional[datetime] = None,
    ) -> List[SpaceContentEntry]:
        """
        Build the ordered content of a space.

        Returns:
            Sorted entries, empty when no live or scheduled activity
            targets the space

        Raises:
            UpstreamBatchError: one or more activity or offer fetches failed
        """
        token = await self.gateway.generate_token()
        activities, audiences, offers = await self.fetch_listings(token)

        selected = select_activities(activities, space_name, now)
        if not selected:
            logger.info(f"No live or scheduled activity found for space '{space_name}'")
            return []

        logger.info(f"Space '{space_name}': {len(selected)} activities selected")

        merged = await asyncio.gather(
            *(self._load_activity(token, activity, audiences) for activity in selected)
        )
        activity_errors = [result for result in merged if isinstance(result, UpstreamFetchError)]
        if activity_errors:
            raise UpstreamBatchError(activity_errors)

        resolved = await asyncio.gather(
            *(self._resolve_offers(token, entry, offers) for entry in merged)
        )
        offer_errors = [error for _, errors in resolved for error in errors]
        if offer_errors:
            raise UpstreamBatchError(offer_errors)

        return sort_space_content([entry for entry, _ in resolved])

    async def fetch_listings(
        self, token: str
    ) -> Tuple[List[ActivityOverview], List[Audience], List[OfferOverview]]:
        """Fetch approved activities, audiences and offers concurrently"""
        activities, audiences, offers = await asyncio.gather(
            self.gateway.fetch_listing(ResourceKind.ACTIVITIES, token, APPROVED_STATE),
            self.gateway.fetch_listing(ResourceKind.AUDIENCES, token),
            self.gateway.fetch_listing(ResourceKind.OFFERS, token),
        )
        return (
            [ActivityOverview.model_validate(activity) for activity in activities],
            [Audience.model_validate(audience) for audience in audiences],
            [OfferOverview.model_validate(offer) for offer in offers],
        )

    async def resolve_offers(
        self,
        token: str,
        entry: SpaceContentEntry,
        offers: Sequence[OfferOverview],
    ) -> SpaceContentEntry:
        """
        Attach offer content to every option of a merged entry.

        Raises:
            UpstreamBatchError: an offer is unknown or its fetch failed
        """
        resolved, errors = await self._resolve_offers(token, entry, offers)
        if errors:
            raise UpstreamBatchError(errors)
        return resolved

    async def _load_activity(
        self,
        token: str,
        activity: SelectedActivity,
        audiences: Sequence[Audience],
    ) -> Union[SpaceContentEntry, UpstreamFetchError]:
        subtype = activity_subtype(activity.type)
        payload = await self.gateway.fetch(ResourceKind.ACTIVITY, token, activity.id, subtype)

        if has_error_indicator(payload):
            logger.error(f"Activity {activity.id} ({subtype}) fetch failed: {payload}")
            return UpstreamFetchError(
                f"Activity {activity.id} fetch failed",
                resource_id=activity.id,
                resource_type=subtype,
                error_info=payload,
            )

        return merge_activity(ActivityDetail.model_validate(payload), activity, audiences)

    async def _resolve_offers(
        self,
        token: str,
        entry: SpaceContentEntry,
        offers: Sequence[OfferOverview],
    ) -> Tuple[SpaceContentEntry, List[UpstreamFetchError]]:
        offers_by_id: Dict[TargetId, OfferOverview] = {}
        for offer in offers:
            offers_by_id.setdefault(offer.id, offer)

        results = await asyncio.gather(
            *(self._resolve_option(token, entry, option, offers_by_id) for option in entry.options)
        )
        errors = [result for result in results if isinstance(result, UpstreamFetchError)]
        options = [result for result in results if not isinstance(result, UpstreamFetchError)]

        return entry.model_copy(update={"options": options}), errors

    async def _resolve_option(
        self,
        token: str,
        entry: SpaceContentEntry,
        option: EnrichedOption,
        offers_by_id: Dict[TargetId, OfferOverview],
    ) -> Union[EnrichedOption, UpstreamFetchError]:
        offer = offers_by_id.get(option.offer_id)
        if offer is None:
            logger.error(f"Offer {option.offer_id} of activity {entry.model_extra.get('id')} not in offer listing")
            return UpstreamFetchError(
                f"Offer {option.offer_id} not found in offer listing",
                resource_id=option.offer_id,
                resource_type="offer",
            )

        payload = await self.gateway.fetch(ResourceKind.OFFER, token, offer.id, offer.type)
        if has_error_indicator(payload):
            logger.error(f"Offer {offer.id} ({offer.type}) fetch failed: {payload}")
            return UpstreamFetchError(
                f"Offer {offer.id} fetch failed",
                resource_id=offer.id,
                resource_type=offer.type,
                error_info=payload,
            )

        offer_detail = OfferDetail.model_validate(payload)
        return EnrichedOption.model_validate(
            {
                **option.to_wire(),
                "scheduling": ScheduleSnapshot(
                    status=entry.scheduling,
                    starts_at=entry.starts_at,
                    ends_at=entry.ends_at,
                ),
                "type": TypeTag(activity=entry.type, offer=offer.type),
                "offerDetails": OfferContent(id=offer_detail.id, content=offer_detail.content),
            }
        )


__all__ = [
    "normalize_space_name",
    "activity_subtype",
    "select_activities",
    "resolve_audience",
    "find_experience_mbox",
    "merge_activity",
    "sort_space_content",
    "SpaceContentService",
]
