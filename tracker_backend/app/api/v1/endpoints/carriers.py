"""
Carrier Detection API Endpoints.
"""

from fastapi import APIRouter

from tracker_backend.app.core.exceptions import EmptyInputError
from tracker_backend.app.schemas.extraction import CarrierRequest, CarrierResponse
from tracker_backend.app.services.carrier_detection import suggest_carrier

router = APIRouter(prefix="/carriers", tags=["Carriers"])


@router.post("/classify", response_model=CarrierResponse)
async def classify(request: CarrierRequest):
    """
    Detect the carrier for a tracking number.
    
    A non-blank carrier_override is returned as-is.
    """
    tracking_number = request.tracking_number.strip()
    if not tracking_number:
        raise EmptyInputError("tracking_number")
    
    return CarrierResponse(
        tracking_number=tracking_number,
        carrier=suggest_carrier(tracking_number, request.carrier_override)
    )
