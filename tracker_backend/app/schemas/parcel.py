"""
Parcel Pydantic schemas.

Defines the read-only parcel aggregate (scan log + inferred phase) handed to
the analysis services, and the derived values they produce.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional, Tuple, Union
from tracker_backend.app.models.phase_enums import Phase


# Timestamps stay verbatim; parsing happens during analysis.
Instant = Union[datetime, str]


class ScanEvent(BaseModel):
    """One courier-reported fact, exactly as the courier worded it."""
    model_config = ConfigDict(frozen=True)

    timestamp: Instant = Field(..., description="When the courier recorded the scan")
    location: Optional[str] = None
    code: Optional[str] = Field(None, description="Carrier event code")
    message: str = Field(..., description="Courier's exact wording")
    phase_hint: Optional[Phase] = Field(None, description="Phase suggested by this scan, if any")


class Parcel(BaseModel):
    """
    Parcel aggregate.

    The scan log is append-only and kept in insertion order; insertion
    order only matters as a tie-break between identical timestamps.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    carrier: str = "Unknown"
    tracking_number: str
    title: Optional[str] = None
    tracking_url: Optional[str] = None
    scans: Tuple[ScanEvent, ...] = ()
    inferred_phase: Phase = Phase.UNKNOWN
    last_updated: Instant
    eta: Optional[Instant] = None


class AnomalyReport(BaseModel):
    """Reversal and stall flags for one parcel."""
    reversed: bool
    stalled: bool
    hours_since_last: Optional[int] = Field(
        None, description="Rounded hours since the latest scan; None when recency is unknown"
    )


class ConfidenceBreakdown(BaseModel):
    """Trust score for the inferred phase, with its components."""
    freshness: Optional[float] = Field(None, ge=0, le=100)
    agreement: int = Field(..., ge=0, le=100)
    score: Optional[int] = Field(None, ge=0, le=100)


class ParcelStatus(BaseModel):
    """Everything needed to render one parcel card."""
    parcel_id: str
    inferred_phase: Phase
    last_scan: Optional[ScanEvent]
    timeline: List[ScanEvent] = Field(default_factory=list, description="Scan log, newest first")
    anomalies: AnomalyReport
    confidence: ConfidenceBreakdown
    alert: Optional[str] = None
