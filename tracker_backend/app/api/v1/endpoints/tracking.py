"""
Tracking Analysis API Endpoints.

Runs anomaly detection and confidence scoring over a parcel snapshot
supplied by the caller. Nothing is stored.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter

from tracker_backend.app.schemas.parcel import AnomalyReport, ConfidenceBreakdown, ParcelStatus
from tracker_backend.app.schemas.tracking import AnalysisRequest, SearchRequest, SearchResponse
from tracker_backend.app.services.anomaly_detection import detect_anomalies
from tracker_backend.app.services.confidence_scoring import score_confidence
from tracker_backend.app.services.parcel_status import build_parcel_status, search_parcels

router = APIRouter(prefix="/tracking", tags=["Tracking Analysis"])


def resolve_now(now: Optional[datetime]) -> datetime:
    """Caller-supplied reference time, or the current UTC time."""
    return now or datetime.now(timezone.utc)


@router.post("/anomalies", response_model=AnomalyReport)
async def parcel_anomalies(request: AnalysisRequest):
    """
    Detect status reversals and stalls for a parcel.
    
    hours_since_last is null when the parcel carries no valid timestamp.
    """
    return detect_anomalies(request.parcel, request.stall_hours, now=resolve_now(request.now))


@router.post("/confidence", response_model=ConfidenceBreakdown)
async def parcel_confidence(request: AnalysisRequest):
    """Score trust in the parcel's inferred phase (0-100) with its components."""
    return score_confidence(request.parcel, now=resolve_now(request.now))


@router.post("/status", response_model=ParcelStatus)
async def parcel_status(request: AnalysisRequest):
    """Full status card: latest scan, anomalies, confidence and alert label."""
    return build_parcel_status(request.parcel, request.stall_hours, now=resolve_now(request.now))


@router.post("/search", response_model=SearchResponse)
async def parcel_search(request: SearchRequest):
    """Filter parcels by title, carrier or tracking number."""
    matches = search_parcels(request.parcels, request.query)
    return SearchResponse(parcels=matches, total=len(matches))
