"""
Weekly comparison: this Monday-start week against the one before it.
"""

import logging
from typing import Iterable, Sequence

from src.models.entities import Product, Sale
from src.models.dashboard import WeeklyComparison
from src.services.period_stats_service import stats_for_period
from src.utils.calendar import DateLike, WeekCalendar

logger = logging.getLogger(__name__)


def weekly_comparison(sales: Iterable[Sale], products: Sequence[Product],
                      today: DateLike) -> WeeklyComparison:
    """
    Run the period aggregation over the current and the previous week.

    Args:
        sales: All sale records
        products: All products
        today: Reference day; a Sunday belongs to the week of the Monday before it

    Returns:
        WeeklyComparison; deltas()/trends() give this_week - last_week per metric
    """
    sales = list(sales)
    this_week = WeekCalendar.week_of(today)
    last_week = this_week.previous()
    logger.debug(f"Comparing week {this_week.start} with {last_week.start}")

    return WeeklyComparison(
        this_week=stats_for_period(sales, products, this_week.start, this_week.end),
        last_week=stats_for_period(sales, products, last_week.start, last_week.end),
        week_start=this_week.start,
        week_end=this_week.end,
        last_week_start=last_week.start,
        last_week_end=last_week.end,
    )
