"""
Parcel Phase Enumeration and ordering.

Phases are the canonical stages of a parcel's journey. The rank table gives
them a total order so two phases can be compared directionally.
"""

import enum
from typing import Dict, Optional


class Phase(str, enum.Enum):
    """
    Canonical parcel phase.

    Expected flow:
        LABEL_CREATED → IN_TRANSIT → AT_CUSTOMS → HELD_BY_CUSTOMS
        → CUSTOMS_CLEARED → OUT_FOR_DELIVERY → DELIVERED
        DELIVERED and EXCEPTION are terminal.
    """
    LABEL_CREATED = "Label Created"
    IN_TRANSIT = "In Transit"
    AT_CUSTOMS = "At Customs"
    HELD_BY_CUSTOMS = "Held by Customs"
    CUSTOMS_CLEARED = "Customs Cleared"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    EXCEPTION = "Exception"
    UNKNOWN = "Unknown"


# Unknown shares In Transit's rank so unclassified scans next to early
# transit scans never count as a reversal on their own.
PHASE_RANK: Dict[Phase, int] = {
    Phase.LABEL_CREATED: 0,
    Phase.IN_TRANSIT: 1,
    Phase.AT_CUSTOMS: 2,
    Phase.HELD_BY_CUSTOMS: 3,
    Phase.CUSTOMS_CLEARED: 4,
    Phase.OUT_FOR_DELIVERY: 5,
    Phase.DELIVERED: 6,
    Phase.EXCEPTION: 7,
    Phase.UNKNOWN: 1,
}

TERMINAL_PHASES = frozenset({Phase.DELIVERED, Phase.EXCEPTION})


def phase_rank(phase: Optional[Phase]) -> int:
    """Rank of a phase in the progression order; an absent hint ranks as Unknown."""
    return PHASE_RANK[phase or Phase.UNKNOWN]


def is_terminal(phase: Phase) -> bool:
    return phase in TERMINAL_PHASES
