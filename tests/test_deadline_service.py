"""Tests for the distribution deadline banner."""

from datetime import date, datetime

import pytest

from src.models.enums import DeadlineState
from src.services.deadline_service import days_remaining, deadline_status, should_warn

TODAY = date(2025, 6, 11)


class TestShouldWarn:

    def test_no_deadline(self):
        assert should_warn(None, TODAY) is False

    @pytest.mark.parametrize("deadline,expected", [
        (date(2025, 6, 11), True),    # due today
        (date(2025, 6, 15), True),
        (date(2025, 6, 18), True),    # exactly seven days out
        (date(2025, 6, 19), False),   # eight days out
        (date(2025, 6, 10), False),   # passed yesterday
    ])
    def test_window(self, deadline, expected):
        assert should_warn(deadline, TODAY) is expected

    def test_time_of_day_is_ignored(self):
        assert days_remaining(datetime(2025, 6, 18, 0, 1), datetime(2025, 6, 11, 23, 59)) == 7
        assert should_warn(datetime(2025, 6, 18, 0, 1), datetime(2025, 6, 11, 23, 59)) is True

    def test_custom_horizon(self):
        assert should_warn(date(2025, 6, 14), TODAY, warning_days=2) is False
        assert should_warn(date(2025, 6, 13), TODAY, warning_days=2) is True


class TestDeadlineStatus:

    def test_not_set(self):
        status = deadline_status(None, TODAY)
        assert status.state == DeadlineState.NOT_SET
        assert status.days_remaining is None
        assert status.should_warn is False

    def test_upcoming(self):
        status = deadline_status(date(2025, 6, 15), TODAY)
        assert status.state == DeadlineState.UPCOMING
        assert status.days_remaining == 4
        assert status.should_warn is True

    def test_scheduled(self):
        status = deadline_status(date(2025, 7, 1), TODAY)
        assert status.state == DeadlineState.SCHEDULED
        assert status.should_warn is False

    def test_past_due_is_not_warned(self):
        status = deadline_status(date(2025, 6, 1), TODAY)
        assert status.state == DeadlineState.PAST_DUE
        assert status.days_remaining == -10
        assert status.should_warn is False

    def test_to_dict(self):
        payload = deadline_status(datetime(2025, 6, 15, 8, 0), TODAY).to_dict()
        assert payload == {
            "deadline": "2025-06-15",
            "days_remaining": 4,
            "state": "upcoming",
            "should_warn": True,
        }
