"""
Parcel status service.

Read-only views over parcels for the presentation layer: the per-parcel
status card and collection search.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from tracker_backend.app.schemas.parcel import AnomalyReport, Parcel, ParcelStatus
from tracker_backend.app.services.anomaly_detection import detect_anomalies
from tracker_backend.app.services.confidence_scoring import score_confidence
from tracker_backend.app.services.timeline import last_scan, timeline


REVERSAL_ALERT = "Status reversal detected"
STALL_ALERT = "Potential stall"


def alert_label(report: AnomalyReport) -> Optional[str]:
    """Headline alert for a card; a reversal outranks a stall."""
    if report.reversed:
        return REVERSAL_ALERT
    if report.stalled:
        return STALL_ALERT
    return None


def build_parcel_status(
    parcel: Parcel,
    stall_hours: Optional[float] = None,
    *,
    now: datetime
) -> ParcelStatus:
    """Combine anomalies, confidence, the latest scan and the display timeline for one parcel."""
    anomalies = detect_anomalies(parcel, stall_hours, now=now)
    return ParcelStatus(
        parcel_id=parcel.id,
        inferred_phase=parcel.inferred_phase,
        last_scan=last_scan(parcel),
        timeline=timeline(parcel),
        anomalies=anomalies,
        confidence=score_confidence(parcel, now=now),
        alert=alert_label(anomalies)
    )


def search_parcels(parcels: Iterable[Parcel], query: str) -> List[Parcel]:
    """
    Case-insensitive substring search over title, carrier and tracking number.
    
    An empty query matches everything; input order is preserved.
    """
    needle = (query or "").lower()
    return [
        parcel for parcel in parcels
        if needle in f"{parcel.title or ''} {parcel.carrier} {parcel.tracking_number}".lower()
    ]
