"""
Period statistics: visited stores and achieved checklist targets
inside a date window.
"""

import logging
from datetime import datetime
from typing import Iterable, Sequence

from src.models.entities import Product, Sale
from src.models.enums import ProductType
from src.models.dashboard import PeriodStats
from src.utils.calendar import DateLike, day_bounds

logger = logging.getLogger(__name__)


def _in_window(moment: datetime, start: datetime, end: datetime) -> bool:
    if moment.tzinfo is not None:
        # compare on the sale's own calendar day
        start = start.replace(tzinfo=moment.tzinfo)
        end = end.replace(tzinfo=moment.tzinfo)
    return start <= moment <= end


def stats_for_period(sales: Iterable[Sale], products: Sequence[Product],
                     start: DateLike, end: DateLike) -> PeriodStats:
    """
    Aggregate sale activity between two calendar days, both inclusive.

    Args:
        sales: Sale records in any order
        products: Products used to classify each sale as DD or Fokus
        start: First day of the window (counted from 00:00:00.000)
        end: Last day of the window (counted until 23:59:59.999)

    Returns:
        PeriodStats with distinct visited stores and per-type sale event counts.
        Sales for unknown products still count as visits but not as targets.
    """
    window_start, window_end = day_bounds(start, end)
    product_types = {p.id: p.type for p in products}

    visited = set()
    dd_achieved = fokus_achieved = 0
    for sale in sales:
        if not _in_window(sale.date, window_start, window_end):
            continue
        visited.add(sale.store_id)

        product_type = product_types.get(sale.product_id)
        if product_type == ProductType.DD:
            dd_achieved += 1
        elif product_type == ProductType.FOKUS:
            fokus_achieved += 1
        else:
            logger.debug(f"Sale references unknown product {sale.product_id}, not counted")

    logger.debug(f"Period {window_start:%Y-%m-%d}..{window_end:%Y-%m-%d}: "
                 f"{len(visited)} stores, {dd_achieved} DD, {fokus_achieved} Fokus")
    return PeriodStats(
        visited_stores=len(visited),
        dd_achieved=dd_achieved,
        fokus_achieved=fokus_achieved,
    )
