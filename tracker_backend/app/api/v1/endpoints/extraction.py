"""
Tracking Number Extraction API Endpoints.
"""

from fastapi import APIRouter

from tracker_backend.app.core.exceptions import EmptyInputError
from tracker_backend.app.schemas.extraction import ExtractionRequest, ExtractionResponse
from tracker_backend.app.services.text_extraction import extract_candidates, new_candidates

router = APIRouter(prefix="/extraction", tags=["Extraction"])


@router.post("/candidates", response_model=ExtractionResponse)
async def candidates(request: ExtractionRequest):
    """
    Harvest candidate tracking numbers and links from pasted text.
    
    Numbers listed in known_tracking_numbers are left out.
    """
    if not request.text.strip():
        raise EmptyInputError("text")
    
    found = extract_candidates(request.text)
    return ExtractionResponse(
        candidates=new_candidates(found, request.known_tracking_numbers)
    )
