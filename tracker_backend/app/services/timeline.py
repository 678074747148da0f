"""
Timeline service.

Computes the chronological view of a parcel's scan log. The stored log is
never reordered; every caller gets a freshly sorted copy.
"""

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from tracker_backend.app.core.exceptions import MalformedTimestampError
from tracker_backend.app.schemas.parcel import Instant, Parcel, ScanEvent

logger = logging.getLogger("tracker.timeline")

SECONDS_PER_HOUR = 3600.0


def parse_instant(value: Instant) -> datetime:
    """
    Parse an ISO-8601 string (or pass through a datetime) as an aware UTC instant.
    
    Naive values are taken to be UTC.
    
    Raises:
        MalformedTimestampError: If the value is not a valid instant
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise MalformedTimestampError(value) from None
    
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # valid offset, but the UTC equivalent is outside datetime's range
        raise MalformedTimestampError(value) from None


def _try_parse(value: Optional[Instant], parcel_id: str) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return parse_instant(value)
    except MalformedTimestampError as exc:
        logger.warning(
            "Ignoring malformed timestamp",
            extra={"parcel_id": parcel_id, "value": exc.details["value"]}
        )
        return None


def chronological_scans(parcel: Parcel) -> List[Tuple[datetime, ScanEvent]]:
    """
    Scans with a valid timestamp, oldest first.
    
    sorted() is stable, so scans sharing a timestamp keep their insertion
    order. Scans whose timestamp cannot be parsed are left out.
    """
    dated = []
    for scan in parcel.scans:
        instant = _try_parse(scan.timestamp, parcel.id)
        if instant is not None:
            dated.append((instant, scan))
    return sorted(dated, key=lambda pair: pair[0])


def last_scan(parcel: Parcel) -> Optional[ScanEvent]:
    """Chronologically latest scan, or None for an empty (or wholly unparseable) log."""
    scans = chronological_scans(parcel)
    return scans[-1][1] if scans else None


def timeline(parcel: Parcel, newest_first: bool = True) -> List[ScanEvent]:
    """
    Scan log ordered for display.

    Ties keep insertion order in both directions.
    """
    dated = chronological_scans(parcel)
    if newest_first:
        dated = sorted(dated, key=lambda pair: pair[0], reverse=True)
    return [scan for _, scan in dated]


def last_activity(parcel: Parcel) -> Optional[datetime]:
    """
    Instant of the latest scan, falling back to the parcel's last-updated time.
    
    Returns None when neither is a valid instant.
    """
    scans = chronological_scans(parcel)
    if scans:
        return scans[-1][0]
    return _try_parse(parcel.last_updated, parcel.id)


def hours_since_last(parcel: Parcel, now: datetime) -> Optional[float]:
    """Unrounded hours between the latest activity and `now`; None when unknown."""
    latest = last_activity(parcel)
    if latest is None:
        return None
    return (parse_instant(now) - latest).total_seconds() / SECONDS_PER_HOUR


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
