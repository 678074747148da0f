"""
Tracking analysis request schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional
from tracker_backend.app.schemas.parcel import Parcel


class AnalysisRequest(BaseModel):
    """Parcel snapshot to analyse; `now` defaults to the server clock."""
    parcel: Parcel
    stall_hours: Optional[float] = Field(None, gt=0, description="Stall threshold in hours")
    now: Optional[datetime] = None


class SearchRequest(BaseModel):
    parcels: List[Parcel]
    query: str = ""


class SearchResponse(BaseModel):
    parcels: List[Parcel]
    total: int
