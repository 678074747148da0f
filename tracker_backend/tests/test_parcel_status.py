"""
Tests for timeline helpers, parcel status cards and parcel search.
"""

import pytest

from tracker_backend.app.core.exceptions import MalformedTimestampError
from tracker_backend.app.models.phase_enums import Phase
from tracker_backend.app.schemas.parcel import AnomalyReport
from tracker_backend.app.services.parcel_status import (
    REVERSAL_ALERT,
    STALL_ALERT,
    alert_label,
    build_parcel_status,
    search_parcels,
)
from tracker_backend.app.services.timeline import last_scan, parse_instant, timeline


def test_parse_instant_normalises_to_utc():
    parsed = parse_instant("2025-08-23T09:00:00+02:00")
    assert parsed.isoformat() == "2025-08-23T07:00:00+00:00"
    assert parse_instant("2025-08-23T07:00:00Z") == parsed


def test_parse_instant_rejects_garbage():
    with pytest.raises(MalformedTimestampError) as exc_info:
        parse_instant("Tuesday-ish")
    assert exc_info.value.error_code == "ERR_TIMESTAMP_001"


def test_timeline_newest_first(make_scan, make_parcel):
    early, late, middle = make_scan(30, message="early"), make_scan(1, message="late"), make_scan(10, message="middle")
    parcel = make_parcel([early, late, middle])
    assert timeline(parcel) == [late, middle, early]
    assert timeline(parcel, newest_first=False) == [early, middle, late]


def test_timeline_ties_keep_insertion_order(make_scan, make_parcel):
    first, second = make_scan(5, message="first"), make_scan(5, message="second")
    parcel = make_parcel([first, second])
    assert timeline(parcel) == [first, second]
    assert timeline(parcel, newest_first=False) == [first, second]


def test_last_scan(make_scan, make_parcel):
    latest = make_scan(2, Phase.OUT_FOR_DELIVERY)
    assert last_scan(make_parcel([make_scan(9), latest, make_scan(4)])) == latest
    assert last_scan(make_parcel([])) is None


@pytest.mark.parametrize("reversed_, stalled, expected", [
    (True, True, REVERSAL_ALERT),
    (True, False, REVERSAL_ALERT),
    (False, True, STALL_ALERT),
    (False, False, None),
])
def test_alert_label(reversed_, stalled, expected):
    report = AnomalyReport(reversed=reversed_, stalled=stalled, hours_since_last=1)
    assert alert_label(report) == expected


def test_build_parcel_status(make_scan, make_parcel, now):
    """Customs regression a day ago: reversal alert, not stalled, disagreeing phase."""
    cleared = make_scan(30, Phase.CUSTOMS_CLEARED, message="Cleared customs")
    held = make_scan(24, Phase.HELD_BY_CUSTOMS, message="Held for random inspection")
    parcel = make_parcel([cleared, held], inferred_phase=Phase.CUSTOMS_CLEARED, id="p2")
    
    status = build_parcel_status(parcel, 48, now=now)
    
    assert status.parcel_id == "p2"
    assert status.last_scan == held
    assert status.anomalies == AnomalyReport(reversed=True, stalled=False, hours_since_last=24)
    assert status.confidence.agreement == 50
    assert status.confidence.score == 60
    assert status.alert == REVERSAL_ALERT


def test_search_parcels(make_parcel):
    headphones = make_parcel(id="p1", title="Headphones", carrier="DPD", tracking_number="123456789012")
    cable = make_parcel(id="p2", title="USB-C Cable", carrier="Amazon Logistics", tracking_number="TBA123456789")
    untitled = make_parcel(id="p3", carrier="UPS", tracking_number="1Z12345E")
    parcels = [headphones, cable, untitled]
    
    assert search_parcels(parcels, "head") == [headphones]
    assert search_parcels(parcels, "AMAZON") == [cable]
    assert search_parcels(parcels, "1z123") == [untitled]
    assert search_parcels(parcels, "") == parcels
    assert search_parcels(parcels, "nothing") == []


@pytest.mark.parametrize("value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
def test_parse_instant_rejects_out_of_range(value):
    with pytest.raises(MalformedTimestampError):
        parse_instant(value)


def test_status_carries_timeline(make_scan, make_parcel, now):
    older, newer = make_scan(8, Phase.IN_TRANSIT, message="older"), make_scan(2, Phase.OUT_FOR_DELIVERY, message="newer")
    status = build_parcel_status(make_parcel([older, newer]), now=now)
    assert status.timeline == [newer, older]
    assert build_parcel_status(make_parcel([]), now=now).timeline == []
