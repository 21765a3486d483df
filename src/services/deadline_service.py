"""
Deadline monitor for the distribution deadline banner.

Policy: warn when the deadline is 0..7 days away. Once the deadline has
passed the banner is suppressed; the PAST_DUE state is reported separately
so a caller can still show it.
"""

import logging
from typing import Optional

from src.models.dashboard import DeadlineStatus
from src.models.enums import DeadlineState
from src.utils.calendar import DateLike, WeekCalendar, to_date

logger = logging.getLogger(__name__)

DEFAULT_WARNING_DAYS = 7


def days_remaining(deadline: DateLike, today: DateLike) -> int:
    """Days until deadline with both sides normalized to midnight."""
    return WeekCalendar.days_between(today, deadline)


def should_warn(deadline: Optional[DateLike], today: DateLike,
                warning_days: int = DEFAULT_WARNING_DAYS) -> bool:
    """True when a deadline is set and falls within [today, today + warning_days]."""
    if deadline is None:
        return False
    remaining = days_remaining(deadline, today)
    return 0 <= remaining <= warning_days


def deadline_status(deadline: Optional[DateLike], today: DateLike,
                    warning_days: int = DEFAULT_WARNING_DAYS) -> DeadlineStatus:
    if deadline is None:
        return DeadlineStatus(deadline=None, days_remaining=None,
                              state=DeadlineState.NOT_SET, should_warn=False)

    remaining = days_remaining(deadline, today)
    if remaining < 0:
        state = DeadlineState.PAST_DUE
        logger.debug(f"Deadline passed {-remaining} day(s) ago; warning suppressed")
    elif remaining <= warning_days:
        state = DeadlineState.UPCOMING
    else:
        state = DeadlineState.SCHEDULED

    return DeadlineStatus(
        deadline=to_date(deadline),
        days_remaining=remaining,
        state=state,
        should_warn=should_warn(deadline, today, warning_days),
    )
