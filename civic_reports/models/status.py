"""Report status lifecycle."""

from enum import Enum
from typing import Dict, FrozenSet


class ReportStatus(str, Enum):
    """Status values a report can hold. NEW is always the initial state."""

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"


INITIAL_STATUS = ReportStatus.NEW

# {from_status: {to_status, ...}}
ALLOWED_TRANSITIONS: Dict[ReportStatus, FrozenSet[ReportStatus]] = {
    ReportStatus.NEW: frozenset({ReportStatus.IN_PROGRESS, ReportStatus.REJECTED}),
    ReportStatus.IN_PROGRESS: frozenset({ReportStatus.RESOLVED, ReportStatus.REJECTED}),
    ReportStatus.RESOLVED: frozenset({ReportStatus.IN_PROGRESS}),
    ReportStatus.REJECTED: frozenset(),
}


def can_transition(current: ReportStatus, target: ReportStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def allowed_targets(current: ReportStatus) -> list[str]:
    """Sorted status values reachable from ``current``."""
    return sorted(s.value for s in ALLOWED_TRANSITIONS.get(current, frozenset()))
