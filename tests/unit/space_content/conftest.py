"""
Unit Test Fixtures for Space Content Service

Pure-logic fixtures: a fixed clock and model builders over the Target
payload factory.
"""

import pytest
from datetime import datetime, timezone
from typing import Any, Dict, List

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.space_content_service.models import (
    ActivityDetail,
    ActivityOverview,
    Audience,
    ScheduleStatus,
    SelectedActivity,
)


FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant: 2026-03-01T12:00:00Z"""
    return FIXED_NOW


def make_selected_activity(
    activity_id: int = 1,
    activity_type: str = "ab",
    name: str = "Home Promo Banner",
    scheduling: ScheduleStatus = ScheduleStatus.LIVE,
    starts_at: str = None,
    ends_at: str = None,
) -> SelectedActivity:
    return SelectedActivity(
        id=activity_id,
        name=name,
        type=activity_type,
        scheduling=scheduling,
        starts_at=starts_at,
        ends_at=ends_at,
    )


def make_detail(payload: Dict[str, Any]) -> ActivityDetail:
    return ActivityDetail.model_validate(payload)


def make_audiences(payloads: List[Dict[str, Any]]) -> List[Audience]:
    return [Audience.model_validate(payload) for payload in payloads]


def make_overviews(payloads: List[Dict[str, Any]]) -> List[ActivityOverview]:
    return [ActivityOverview.model_validate(payload) for payload in payloads]
