"""
Extraction and carrier classification schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class TrackingCandidate(BaseModel):
    """A tracking number harvested from free text, pending user acceptance."""
    model_config = ConfigDict(frozen=True)

    tracking_number: str
    tracking_url: Optional[str] = None


class ExtractionRequest(BaseModel):
    text: str = Field(..., description="Pasted email or web page content")
    known_tracking_numbers: List[str] = Field(
        default_factory=list, description="Numbers already tracked; matching candidates are dropped"
    )


class ExtractionResponse(BaseModel):
    candidates: List[TrackingCandidate]


class CarrierRequest(BaseModel):
    tracking_number: str
    carrier_override: Optional[str] = Field(None, description="User-typed carrier, wins over detection")


class CarrierResponse(BaseModel):
    tracking_number: str
    carrier: str
