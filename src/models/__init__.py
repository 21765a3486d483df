"""
Data models for the sales monitor.
"""

from .enums import StoreLevel, ProductType, TrendDirection, DeadlineState
from .entities import (
    ValidationError,
    ValidationResult,
    Store,
    Product,
    Sale,
    AppSettings,
    Snapshot,
    VisitPlan,
    create_store_from_dict,
    create_product_from_dict,
    create_sale_from_dict,
    create_settings_from_dict,
    create_visit_plan_from_dict,
    create_snapshot_from_dict,
)
from .dashboard import (
    PeriodStats,
    WeeklyComparison,
    LevelCoverage,
    CoverageStatus,
    TargetSummary,
    StoreProgress,
    ChecklistItem,
    DeadlineStatus,
    WeekDay,
    DashboardData,
)

__all__ = [
    'StoreLevel',
    'ProductType',
    'TrendDirection',
    'DeadlineState',
    'ValidationError',
    'ValidationResult',
    'Store',
    'Product',
    'Sale',
    'AppSettings',
    'Snapshot',
    'VisitPlan',
    'create_store_from_dict',
    'create_product_from_dict',
    'create_sale_from_dict',
    'create_settings_from_dict',
    'create_visit_plan_from_dict',
    'create_snapshot_from_dict',
    'PeriodStats',
    'WeeklyComparison',
    'LevelCoverage',
    'CoverageStatus',
    'TargetSummary',
    'StoreProgress',
    'ChecklistItem',
    'DeadlineStatus',
    'WeekDay',
    'DashboardData',
]
