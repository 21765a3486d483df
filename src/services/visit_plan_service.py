"""
Visit plan resolution and editing helpers.

A visit plan maps a weekday index (1=Monday .. 6=Saturday) to the set of
store ids planned for that day. No selected day means "show every store".
"""

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from src.models.entities import Store, VisitPlan
from src.utils.calendar import VISIT_DAY_NAMES

logger = logging.getLogger(__name__)


def resolve_day(visit_plan: VisitPlan, day: Optional[int], all_stores: Sequence[Store]) -> List[Store]:
    """
    Stores scheduled for a day, in the order of all_stores.

    Args:
        visit_plan: Day index -> planned store ids
        day: Selected day index, or None for no filter
        all_stores: Every store in the snapshot

    Returns:
        all_stores unchanged when day is None; otherwise only planned stores.
        A day without a plan resolves to an empty list. Planned ids that no
        longer match a store are dropped.
    """
    if day is None:
        return list(all_stores)

    planned = set(visit_plan.get(day, ()))
    return [store for store in all_stores if store.id in planned]


def planned_store_counts(visit_plan: VisitPlan, all_stores: Sequence[Store]) -> Dict[int, int]:
    """Number of existing stores planned for each plannable day."""
    known_ids = {store.id for store in all_stores}
    return {
        day: len(set(visit_plan.get(day, ())) & known_ids)
        for day in VISIT_DAY_NAMES
    }


def toggle_store(selected: Iterable[str], store_id: str) -> FrozenSet[str]:
    """Flip one store in an in-progress day selection."""
    current = set(selected)
    if store_id in current:
        current.discard(store_id)
    else:
        current.add(store_id)
    return frozenset(current)


def toggle_day(selected_day: Optional[int], day: int) -> Optional[int]:
    """Clicking the selected day clears the filter; any other day selects it."""
    return None if selected_day == day else day


def replace_day_plan(visit_plan: VisitPlan, day: int, store_ids: Iterable[str]) -> VisitPlan:
    """
    Return a new plan with one day's set replaced wholesale.

    Raises:
        ValueError: If day is not a plannable day (1-6)
    """
    if day not in VISIT_DAY_NAMES:
        raise ValueError(f"Invalid visit day: {day} (must be 1-6)")
    updated = dict(visit_plan)
    updated[day] = frozenset(store_ids)
    logger.debug(f"Visit plan for day {day} now has {len(updated[day])} stores")
    return MappingProxyType(updated)
