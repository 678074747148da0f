"""
Centralized Test Configuration.
"""

import pytest
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient, ASGITransport

from tracker_backend.app.main import app
from tracker_backend.app.models.phase_enums import Phase
from tracker_backend.app.schemas.parcel import Parcel, ScanEvent

# Fixed reference time so every recency computation is reproducible
NOW = datetime(2025, 8, 25, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_scan():
    """Build a scan dated `hours_ago` hours before NOW."""
    def _make_scan(hours_ago: float, hint: Phase = None, message: str = "Scan", **kwargs):
        return ScanEvent(
            timestamp=(NOW - timedelta(hours=hours_ago)).isoformat(),
            message=message,
            phase_hint=hint,
            **kwargs
        )
    return _make_scan


@pytest.fixture
def make_parcel():
    """Build a parcel around a scan log; last_updated defaults to NOW."""
    def _make_parcel(scans=(), inferred_phase: Phase = Phase.IN_TRANSIT, **kwargs):
        fields = {
            "id": "p1",
            "carrier": "DPD",
            "tracking_number": "123456789012",
            "last_updated": NOW.isoformat(),
        }
        fields.update(kwargs)
        return Parcel(scans=tuple(scans), inferred_phase=inferred_phase, **fields)
    return _make_parcel


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
