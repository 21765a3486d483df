"""
Dashboard Service - composes the computation services into one payload.

Orchestrates:
- Deadline banner state
- Visit plan days and the store list for the selected day
- Week-over-week activity comparison
- Coverage targets met per product type
- Per-store checklist progress

Everything is recomputed from a fresh snapshot on every call.
"""

import logging
from datetime import date
from typing import List, Optional

from src.models.entities import Snapshot
from src.models.enums import ProductType
from src.models.dashboard import ChecklistItem, DashboardData, WeekDay
from src.models.errors import EntityNotFoundError
from src.repositories.interfaces import SnapshotRepository
from src.services.checklist_service import store_checklist, store_progress
from src.services.coverage_service import count_targets_met, evaluate_product
from src.services.deadline_service import DEFAULT_WARNING_DAYS, deadline_status
from src.services.visit_plan_service import planned_store_counts, resolve_day
from src.services.weekly_comparison_service import weekly_comparison
from src.utils.calendar import DateLike, WeekCalendar, to_date

logger = logging.getLogger(__name__)

DEFAULT_STORE_CAPACITY = 96


class DashboardService:
    """Service for dashboard read operations."""

    def __init__(self, repository: SnapshotRepository,
                 deadline_warning_days: int = DEFAULT_WARNING_DAYS,
                 store_capacity: int = DEFAULT_STORE_CAPACITY):
        self.repository = repository
        self.deadline_warning_days = deadline_warning_days
        self.store_capacity = store_capacity

    def build_dashboard(self, today: Optional[DateLike] = None,
                        selected_day: Optional[int] = None) -> DashboardData:
        """
        Build the dashboard for a reference day.

        Args:
            today: Reference day (default: date.today())
            selected_day: Visit plan day 1-6 to filter stores by, None for all stores

        Returns:
            DashboardData computed from the repository's current snapshot
        """
        snapshot = self.repository.snapshot()
        return self.build_from_snapshot(snapshot, today, selected_day)

    def build_from_snapshot(self, snapshot: Snapshot, today: Optional[DateLike] = None,
                            selected_day: Optional[int] = None) -> DashboardData:
        reference = to_date(today) if today is not None else date.today()
        stores = list(snapshot.stores)
        products = list(snapshot.products)
        sales = list(snapshot.sales)

        counts = planned_store_counts(snapshot.visit_plan, stores)
        week_days = [
            WeekDay(day_index=index, name=name, date=day, is_today=is_today,
                    planned_store_count=counts.get(index, 0))
            for index, name, day, is_today in WeekCalendar.visit_days(reference)
        ]

        active = [p for p in products if p.is_active]
        dd_coverage = [evaluate_product(p, stores, sales) for p in active if p.type == ProductType.DD]
        fokus_coverage = [evaluate_product(p, stores, sales) for p in active if p.type == ProductType.FOKUS]

        visible_stores = resolve_day(snapshot.visit_plan, selected_day, stores)

        data = DashboardData(
            today=reference,
            selected_day=selected_day,
            snapshot_version=snapshot.version,
            deadline=deadline_status(snapshot.settings.deadline, reference, self.deadline_warning_days),
            week_days=week_days,
            weekly=weekly_comparison(sales, products, reference),
            total_stores=len(stores),
            store_capacity=self.store_capacity,
            targets=count_targets_met(products, stores, sales),
            dd_coverage=dd_coverage,
            fokus_coverage=fokus_coverage,
            store_progress=[store_progress(store, products, sales) for store in visible_stores],
        )
        logger.debug(f"Dashboard built for {reference} (day={selected_day}, "
                     f"version={snapshot.version}, {len(visible_stores)} stores shown)")
        return data

    def get_store_checklist(self, store_id: str) -> List[ChecklistItem]:
        """Checklist lines for one store, with its level discount applied."""
        snapshot = self.repository.snapshot()
        store = next((s for s in snapshot.stores if s.id == store_id), None)
        if store is None:
            raise EntityNotFoundError(f"Store not found: {store_id}")
        return store_checklist(store, snapshot.products, snapshot.sales, snapshot.settings)
