# src/models/dashboard.py
"""
Data models for dashboard computations.
Provides structured result objects for every dashboard panel.
"""
from dataclasses import dataclass, asdict, field
from datetime import date
from typing import List, Dict, Any, Optional

from .entities import Store, Product
from .enums import StoreLevel, TrendDirection, DeadlineState

WEEKLY_METRICS = ("visited_stores", "dd_achieved", "fokus_achieved")


@dataclass(frozen=True)
class PeriodStats:
    """Activity inside one date window."""
    visited_stores: int = 0
    dd_achieved: int = 0
    fokus_achieved: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WeeklyComparison:
    """This week vs. last week (Monday-start weeks)."""
    this_week: PeriodStats
    last_week: PeriodStats
    week_start: date
    week_end: date
    last_week_start: date
    last_week_end: date

    def deltas(self) -> Dict[str, int]:
        """this_week - last_week for every metric."""
        return {
            metric: getattr(self.this_week, metric) - getattr(self.last_week, metric)
            for metric in WEEKLY_METRICS
        }

    def trends(self) -> Dict[str, TrendDirection]:
        return {metric: TrendDirection.from_delta(delta) for metric, delta in self.deltas().items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "this_week": self.this_week.to_dict(),
            "last_week": self.last_week.to_dict(),
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "last_week_start": self.last_week_start.isoformat(),
            "last_week_end": self.last_week_end.isoformat(),
            "deltas": self.deltas(),
            "trends": {metric: trend.value for metric, trend in self.trends().items()},
        }


@dataclass(frozen=True)
class LevelCoverage:
    """Coverage of one product inside one store level."""
    level: StoreLevel
    percent: float
    store_count: int
    required_count: int
    achieved_count: int

    @property
    def is_skipped(self) -> bool:
        """A level without stores never blocks the product."""
        return self.store_count == 0

    @property
    def is_met(self) -> bool:
        return self.is_skipped or self.achieved_count >= self.required_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "percent": self.percent,
            "store_count": self.store_count,
            "required_count": self.required_count,
            "achieved_count": self.achieved_count,
            "is_met": self.is_met,
            "is_skipped": self.is_skipped,
        }


@dataclass(frozen=True)
class CoverageStatus:
    """Per-level breakdown of a product's coverage target."""
    product: Product
    levels: List[LevelCoverage] = field(default_factory=list)

    @property
    def has_target(self) -> bool:
        return bool(self.product.target_coverage)

    @property
    def is_met(self) -> bool:
        return self.has_target and all(level.is_met for level in self.levels)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product.id,
            "product_name": self.product.name,
            "type": self.product.type.value,
            "has_target": self.has_target,
            "is_met": self.is_met,
            "levels": [level.to_dict() for level in self.levels],
        }


@dataclass(frozen=True)
class TargetSummary:
    """How many active products of each type have met their coverage target."""
    dd_targets_met: int = 0
    fokus_targets_met: int = 0
    dd_product_count: int = 0
    fokus_product_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StoreProgress:
    """Checklist progress of a single store over active products."""
    store: Store
    dd_achieved: int
    dd_total: int
    fokus_achieved: int
    fokus_total: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "store": self.store.to_dict(),
            "dd_achieved": self.dd_achieved,
            "dd_total": self.dd_total,
            "fokus_achieved": self.fokus_achieved,
            "fokus_total": self.fokus_total,
        }


@dataclass(frozen=True)
class ChecklistItem:
    """One product line in a store's target checklist."""
    product: Product
    is_checked: bool
    discount_percent: float
    final_price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product.id,
            "product_name": self.product.name,
            "type": self.product.type.value,
            "base_price": self.product.base_price,
            "discount_percent": self.discount_percent,
            "final_price": self.final_price,
            "is_checked": self.is_checked,
        }


@dataclass(frozen=True)
class DeadlineStatus:
    """Deadline banner state."""
    deadline: Optional[date]
    days_remaining: Optional[int]
    state: DeadlineState
    should_warn: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "days_remaining": self.days_remaining,
            "state": self.state.value,
            "should_warn": self.should_warn,
        }


@dataclass(frozen=True)
class WeekDay:
    """A plannable day (Monday-Saturday) of the current week."""
    day_index: int
    name: str
    date: date
    is_today: bool
    planned_store_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["date"] = self.date.isoformat()
        return result


@dataclass
class DashboardData:
    """Everything the dashboard shows for one reference date."""
    today: date
    selected_day: Optional[int]
    snapshot_version: int
    deadline: DeadlineStatus
    week_days: List[WeekDay]
    weekly: WeeklyComparison
    total_stores: int
    store_capacity: int
    targets: TargetSummary
    dd_coverage: List[CoverageStatus]
    fokus_coverage: List[CoverageStatus]
    store_progress: List[StoreProgress]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "today": self.today.isoformat(),
            "selected_day": self.selected_day,
            "snapshot_version": self.snapshot_version,
            "deadline": self.deadline.to_dict(),
            "week_days": [d.to_dict() for d in self.week_days],
            "weekly": self.weekly.to_dict(),
            "total_stores": self.total_stores,
            "store_capacity": self.store_capacity,
            "targets": self.targets.to_dict(),
            "dd_coverage": [c.to_dict() for c in self.dd_coverage],
            "fokus_coverage": [c.to_dict() for c in self.fokus_coverage],
            "store_progress": [p.to_dict() for p in self.store_progress],
        }
