"""
Anomaly detection service.

Flags two kinds of disagreement between a parcel's scan log and its
inferred phase:
- reversal: a later scan's phase hint ranks behind an earlier one
- stall: no activity for longer than a threshold in a non-terminal phase
"""

import logging
from datetime import datetime
from typing import Optional

from tracker_backend.app.core.config import settings
from tracker_backend.app.models.phase_enums import is_terminal, phase_rank
from tracker_backend.app.schemas.parcel import AnomalyReport, Parcel
from tracker_backend.app.services.timeline import (
    chronological_scans,
    hours_since_last,
    round_half_up,
)

logger = logging.getLogger("tracker.anomalies")


def has_reversal(parcel: Parcel) -> bool:
    """
    True if any adjacent pair of scans (oldest first) steps backwards in rank.
    
    Stops at the first regression; where it happened is not reported.
    """
    scans = [scan for _, scan in chronological_scans(parcel)]
    for previous, current in zip(scans, scans[1:]):
        if phase_rank(current.phase_hint) < phase_rank(previous.phase_hint):
            return True
    return False


def detect_anomalies(
    parcel: Parcel,
    stall_hours: Optional[float] = None,
    *,
    now: datetime
) -> AnomalyReport:
    """
    Detect reversal and stall anomalies for a parcel.
    
    Args:
        parcel: Parcel snapshot (never modified)
        stall_hours: Stall threshold; defaults to settings.stall_threshold_hours
        now: Reference instant for recency
    
    Returns:
        AnomalyReport. When no valid timestamp exists at all,
        hours_since_last is None and stalled is False.
    """
    threshold = settings.stall_threshold_hours if stall_hours is None else stall_hours
    reversed_ = has_reversal(parcel)
    
    hours = hours_since_last(parcel, now)
    if hours is None:
        logger.warning("Recency unknown, stall check skipped", extra={"parcel_id": parcel.id})
        return AnomalyReport(reversed=reversed_, stalled=False, hours_since_last=None)
    
    # Threshold compared at full precision; rounding is for display only
    stalled = not is_terminal(parcel.inferred_phase) and hours > threshold
    
    return AnomalyReport(
        reversed=reversed_,
        stalled=stalled,
        hours_since_last=round_half_up(hours)
    )
