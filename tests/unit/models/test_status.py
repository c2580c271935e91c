"""Tests for the report status transition table."""

import pytest

from civic_reports.models.status import (
    ALLOWED_TRANSITIONS,
    INITIAL_STATUS,
    ReportStatus,
    allowed_targets,
    can_transition,
)


class TestReportStatus:
    def test_initial_status_is_new(self):
        assert INITIAL_STATUS is ReportStatus.NEW
        assert INITIAL_STATUS.value == "NEW"

    def test_every_status_has_transition_entry(self):
        assert set(ALLOWED_TRANSITIONS) == set(ReportStatus)

    def test_str_enum_compares_to_plain_string(self):
        assert ReportStatus.RESOLVED == "RESOLVED"


class TestTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (ReportStatus.NEW, ReportStatus.IN_PROGRESS),
            (ReportStatus.NEW, ReportStatus.REJECTED),
            (ReportStatus.IN_PROGRESS, ReportStatus.RESOLVED),
            (ReportStatus.IN_PROGRESS, ReportStatus.REJECTED),
            (ReportStatus.RESOLVED, ReportStatus.IN_PROGRESS),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target) is True

    @pytest.mark.parametrize(
        "current,target",
        [
            (ReportStatus.NEW, ReportStatus.NEW),
            (ReportStatus.NEW, ReportStatus.RESOLVED),
            (ReportStatus.IN_PROGRESS, ReportStatus.NEW),
            (ReportStatus.RESOLVED, ReportStatus.REJECTED),
            (ReportStatus.REJECTED, ReportStatus.IN_PROGRESS),
        ],
    )
    def test_disallowed(self, current, target):
        assert can_transition(current, target) is False

    def test_nothing_returns_to_new(self):
        for current in ReportStatus:
            assert not can_transition(current, ReportStatus.NEW)

    def test_allowed_targets_sorted(self):
        assert allowed_targets(ReportStatus.NEW) == ["IN_PROGRESS", "REJECTED"]
        assert allowed_targets(ReportStatus.REJECTED) == []
