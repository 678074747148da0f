"""
Confidence scoring service.

Scores (0-100) how far the displayed inferred phase can be trusted, as a
weighted blend of data freshness and agreement with the latest scan.
"""

from datetime import datetime
from typing import Optional

from tracker_backend.app.core.config import settings
from tracker_backend.app.models.phase_enums import Phase
from tracker_backend.app.schemas.parcel import ConfidenceBreakdown, Parcel
from tracker_backend.app.services.timeline import hours_since_last, last_scan, round_half_up


# Static weights
FRESHNESS_WEIGHT = 0.6
AGREEMENT_WEIGHT = 0.4

FULL_AGREEMENT = 100
PARTIAL_AGREEMENT = 50  # disagreement is informative, not disqualifying


def freshness_score(recency_hours: float, horizon_hours: Optional[float] = None) -> float:
    """
    Linear decay from 100 (just scanned) to 0 at the horizon, floored at 0.
    Scans dated after `now` count as just scanned.
    """
    horizon = settings.freshness_horizon_hours if horizon_hours is None else horizon_hours
    elapsed = min(max(recency_hours, 0.0), horizon)
    return max(0.0, 100.0 - elapsed * (100.0 / horizon))


def agreement_score(parcel: Parcel) -> int:
    latest = last_scan(parcel)
    hint = (latest.phase_hint if latest else None) or Phase.UNKNOWN
    return FULL_AGREEMENT if hint == parcel.inferred_phase else PARTIAL_AGREEMENT


def score_confidence(parcel: Parcel, *, now: datetime) -> ConfidenceBreakdown:
    """
    Score confidence with explainability.
    
    Returns:
        ConfidenceBreakdown; freshness and score are None when no valid
        timestamp exists, so no misleading number is shown.
    """
    agreement = agreement_score(parcel)
    recency = hours_since_last(parcel, now)
    if recency is None:
        return ConfidenceBreakdown(freshness=None, agreement=agreement, score=None)
    
    freshness = freshness_score(recency)
    score = round_half_up(FRESHNESS_WEIGHT * freshness + AGREEMENT_WEIGHT * agreement)
    
    return ConfidenceBreakdown(
        freshness=round(freshness, 2),
        agreement=agreement,
        score=score
    )


def confidence(parcel: Parcel, *, now: datetime) -> Optional[int]:
    """Confidence score in [0, 100], or None when recency is unknown."""
    return score_confidence(parcel, now=now).score
