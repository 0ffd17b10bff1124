"""
Activity scheduling

Date parsing and live/scheduled/expired classification for Target entities.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from .models import WHEN_ACTIVATED, ScheduleStatus

_FRACTION = re.compile(r"([T ]\d{2}:\d{2}:\d{2})\.(\d+)")
_COMPACT_OFFSET = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)([+-])(\d{2})(\d{2})$")


@dataclass(frozen=True)
class ParsedDate:
    """
    Outcome of parsing a Target date field.

    Either a valid timezone-aware instant, a missing value, or a parse failure
    that keeps the raw text (sentinels such as "when activated" end up here).
    """
    raw: Optional[str] = None
    instant: Optional[datetime] = None

    @property
    def is_missing(self) -> bool:
        return self.raw is None

    @property
    def is_valid(self) -> bool:
        return self.instant is not None

    def sort_key(self) -> Tuple[int, float, str]:
        # real instants first, then everything else by raw text
        if self.instant is not None:
            return (0, self.instant.timestamp(), "")
        return (1, 0.0, self.raw or "")


def parse_instant(value: Any) -> ParsedDate:
    """
    Parse an ISO-8601 Target date.

    A trailing ``Z`` is accepted and naive values are taken as UTC.
    Empty values are reported as missing rather than invalid.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return ParsedDate()

    if isinstance(value, datetime):
        instant = value
    else:
        text = str(value).strip()
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        # fromisoformat before 3.11 wants exactly 6 fraction digits and HH:MM offsets
        text = _FRACTION.sub(lambda m: m.group(1) + "." + (m.group(2) + "000000")[:6], text)
        text = _COMPACT_OFFSET.sub(r"\1\2\3:\4", text)
        try:
            instant = datetime.fromisoformat(text)
        except ValueError:
            return ParsedDate(raw=str(value))

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return ParsedDate(raw=str(value), instant=instant)


def classify_schedule(
    starts_at: Any,
    ends_at: Any,
    now: Optional[datetime] = None,
) -> ScheduleStatus:
    """
    Derive the schedule status of an entity from its start and end dates.

    A missing start counts as already started and a missing end as open-ended.
    A date that is present but unparsable never satisfies a comparison, so it
    leaves the entity scheduled.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    start = parse_instant(starts_at)
    end = parse_instant(ends_at)

    started = start.is_missing or (start.is_valid and now >= start.instant)
    not_ended = end.is_missing or (end.is_valid and now <= end.instant)

    if started and not_ended:
        return ScheduleStatus.LIVE
    if end.is_valid and now > end.instant:
        return ScheduleStatus.EXPIRED
    return ScheduleStatus.SCHEDULED


def resolve_schedule(
    entity: Any,
    now: Optional[datetime] = None,
) -> Tuple[ScheduleStatus, Optional[str], Optional[str]]:
    """
    Classify an entity exposing startsAt/endsAt or a nested lifetime.

    Returns:
        (status, resolved start, resolved end)
    """
    lifetime = getattr(entity, "lifetime", None)
    starts_at = getattr(entity, "starts_at", None) or (lifetime.start if lifetime else None)
    ends_at = getattr(entity, "ends_at", None) or (lifetime.end if lifetime else None)

    return classify_schedule(starts_at, ends_at, now), starts_at, ends_at


def effective_date(starts_at: Optional[str], ends_at: Optional[str]) -> ParsedDate:
    """Date an entry is ordered by: its start, or its end when it starts on activation"""
    return parse_instant(ends_at if starts_at == WHEN_ACTIVATED else starts_at)


__all__ = [
    "ParsedDate",
    "parse_instant",
    "classify_schedule",
    "resolve_schedule",
    "effective_date",
]
