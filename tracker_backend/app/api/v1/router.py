"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from tracker_backend.app.api.v1.endpoints import tracking, carriers, extraction

router = APIRouter()

# Scan log analysis (anomalies, confidence, status, search)
router.include_router(tracking.router)

# Carrier detection
router.include_router(carriers.router)

# Pasted-text extraction
router.include_router(extraction.router)
