"""
Text extraction service.

Harvests candidate tracking numbers (and the tracking links they came
from) out of pasted email or web page text.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import parse_qs, urlsplit

from tracker_backend.app.core.config import settings
from tracker_backend.app.schemas.extraction import TrackingCandidate
from tracker_backend.app.services.carrier_detection import CARRIER_RULES, CarrierRule

logger = logging.getLogger("tracker.extraction")

URL_PATTERN = re.compile(r"https?://[^\s)]+", re.IGNORECASE)


class CandidateCollector:
    """
    Ordered, case-insensitive set of candidates.

    The first occurrence of a tracking number wins, together with its URL
    (or lack of one); later duplicates are dropped entirely.
    """

    def __init__(self):
        self._found: Dict[str, TrackingCandidate] = {}

    def add(self, tracking_number: str, tracking_url: Optional[str] = None) -> None:
        tracking_number = tracking_number.strip()
        key = tracking_number.upper()
        if not key or key in self._found:
            return
        self._found[key] = TrackingCandidate(
            tracking_number=tracking_number,
            tracking_url=tracking_url
        )

    def candidates(self) -> List[TrackingCandidate]:
        return list(self._found.values())


def _amazon_path_pattern(rules: Sequence[CarrierRule]) -> re.Pattern:
    # Unbounded: path segments like "TBA123_x" still yield "TBA123"
    amazon = next(rule for rule in rules if rule.name == "amazon")
    return re.compile(amazon.classify.pattern, re.IGNORECASE)


def tracking_ids_from_url(
    url: str,
    query_keys: Sequence[str],
    rules: Sequence[CarrierRule] = CARRIER_RULES
) -> Tuple[str, ...]:
    """
    Tracking numbers carried by a tracking link.
    
    Looks at the first non-empty known query key, then searches the path
    for an Amazon-style number. Unparseable URLs yield nothing.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("Skipping unparseable URL", extra={"url": url})
        return ()
    if not parts.netloc:
        return ()
    
    found = []
    params = parse_qs(parts.query)
    for key in query_keys:
        values = [value for value in params.get(key, []) if value.strip()]
        if values:
            found.append(values[0])
            break
    
    path_match = _amazon_path_pattern(rules).search(parts.path)
    if path_match:
        found.append(path_match.group(0))
    
    return tuple(found)


def extract_candidates(
    text: str,
    rules: Sequence[CarrierRule] = CARRIER_RULES,
    query_keys: Optional[Sequence[str]] = None
) -> List[TrackingCandidate]:
    """
    Extract deduplicated tracking candidates from free text.
    
    URLs are processed first so a number found in a link keeps that link;
    the whole body is then scanned with the carrier rules in precedence order.
    
    Returns:
        Candidates in first-seen order; empty for blank text
    """
    if not text or not text.strip():
        return []
    
    keys = settings.tracking_query_keys if query_keys is None else query_keys
    collector = CandidateCollector()
    
    for url_match in URL_PATTERN.finditer(text):
        url = url_match.group(0)
        for tracking_number in tracking_ids_from_url(url, keys, rules):
            collector.add(tracking_number, url)
    
    for rule in rules:
        for match in rule.extract.finditer(text):
            collector.add(match.group(1))
    
    candidates = collector.candidates()
    logger.debug("Extracted tracking candidates", extra={"count": len(candidates)})
    return candidates


def new_candidates(
    candidates: Iterable[TrackingCandidate],
    known_tracking_numbers: Iterable[str]
) -> List[TrackingCandidate]:
    """Drop candidates already tracked, comparing tracking numbers case-insensitively."""
    known = {number.strip().upper() for number in known_tracking_numbers}
    return [
        candidate for candidate in candidates
        if candidate.tracking_number.upper() not in known
    ]
