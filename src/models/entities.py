"""
Pure data models (entities) for the sales monitor.
No business logic - just data structures with type hints.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Optional, List, Dict, Mapping, FrozenSet, Tuple, Any

from .enums import StoreLevel, ProductType

logger = logging.getLogger(__name__)


# ===================================================================
# VALIDATION INFRASTRUCTURE
# ===================================================================

@dataclass
class ValidationError:
    """Represents a validation error with context."""
    field: str
    message: str
    code: str
    severity: str = "error"  # error, warning, info


@dataclass
class ValidationResult:
    """Container for validation results with errors and warnings."""
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return len(self.errors) == 0

    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    def add_error(self, field: str, message: str, code: str = "VALIDATION_ERROR"):
        """Add an error to the validation result."""
        self.errors.append(ValidationError(field, message, code, "error"))

    def add_warning(self, field: str, message: str, code: str = "VALIDATION_WARNING"):
        """Add a warning to the validation result."""
        self.warnings.append(ValidationError(field, message, code, "warning"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": [{"field": e.field, "message": e.message, "code": e.code} for e in self.errors],
            "warnings": [{"field": w.field, "message": w.message, "code": w.code} for w in self.warnings],
        }


# ===================================================================
# PURE DATA MODELS (No business logic)
# ===================================================================

# Weekday index (1=Monday .. 6=Saturday) -> store ids planned for that day.
VisitPlan = Mapping[int, FrozenSet[str]]


@dataclass(frozen=True)
class Store:
    """A retail outlet visited by the field agent."""
    id: str
    name: str
    level: StoreLevel

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "level": self.level.value}


@dataclass(frozen=True)
class Product:
    """
    A product carried on the sales checklist.

    target_coverage maps a store level to the percentage (0-100) of stores
    in that level that must have the product. An empty mapping means the
    product has no target and is never counted as met.
    """
    id: str
    name: str
    type: ProductType
    base_price: float = 0.0
    is_active: bool = True
    target_coverage: Mapping[StoreLevel, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "base_price": self.base_price,
            "is_active": self.is_active,
            "target_coverage": {level.value: pct for level, pct in self.target_coverage.items()},
        }


@dataclass(frozen=True)
class Sale:
    """Product X was achieved at store Y. Quantity does not affect targets."""
    store_id: str
    product_id: str
    date: datetime
    quantity: int = 1

    @property
    def pair(self) -> Tuple[str, str]:
        return (self.store_id, self.product_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "store_id": self.store_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class AppSettings:
    """Per-level discount rates and the distribution deadline."""
    discounts: Mapping[StoreLevel, float] = field(default_factory=dict)
    deadline: Optional[date] = None

    def discount_for(self, level: StoreLevel) -> float:
        return self.discounts.get(level, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "discounts": {level.value: pct for level, pct in self.discounts.items()},
            "deadline": self.deadline.isoformat() if self.deadline else None,
        }


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of everything the computation services need.
    `version` is the repository mutation counter the view was taken at.
    """
    stores: Tuple[Store, ...] = ()
    products: Tuple[Product, ...] = ()
    sales: Tuple[Sale, ...] = ()
    visit_plan: VisitPlan = field(default_factory=lambda: MappingProxyType({}))
    settings: AppSettings = field(default_factory=AppSettings)
    version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "stores": [s.to_dict() for s in self.stores],
            "products": [p.to_dict() for p in self.products],
            "sales": [s.to_dict() for s in self.sales],
            "visit_plan": {str(day): sorted(ids) for day, ids in sorted(self.visit_plan.items())},
            "settings": self.settings.to_dict(),
        }


# ===================================================================
# DICT CONVERSION
# ===================================================================

def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


def _parse_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _level_mapping(raw: Optional[Mapping[str, Any]], context: str) -> Dict[StoreLevel, float]:
    """Convert {"Ritel": 50} style mappings, dropping unknown level keys."""
    result: Dict[StoreLevel, float] = {}
    for key, value in (raw or {}).items():
        try:
            level = key if isinstance(key, StoreLevel) else StoreLevel.parse(key)
        except ValueError:
            logger.warning(f"Ignoring unknown store level {key!r} in {context}")
            continue
        result[level] = float(value or 0)
    return result


def create_store_from_dict(data: Dict[str, Any]) -> Store:
    """Create Store from dictionary data."""
    return Store(
        id=str(data["id"]),
        name=data["name"],
        level=StoreLevel.parse(data["level"]),
    )


def create_product_from_dict(data: Dict[str, Any]) -> Product:
    """Create Product from dictionary data (camelCase keys accepted)."""
    coverage = data.get("target_coverage", data.get("targetCoverage"))
    return Product(
        id=str(data["id"]),
        name=data["name"],
        type=ProductType.parse(data["type"]),
        base_price=float(data.get("base_price", data.get("basePrice", 0)) or 0),
        is_active=bool(data.get("is_active", data.get("isActive", True))),
        target_coverage=_level_mapping(coverage, f"product {data['id']}"),
    )


def create_sale_from_dict(data: Dict[str, Any]) -> Sale:
    """Create Sale from dictionary data."""
    return Sale(
        store_id=str(data.get("store_id", data.get("storeId"))),
        product_id=str(data.get("product_id", data.get("productId"))),
        quantity=int(data.get("quantity", 1)),
        date=_parse_datetime(data["date"]),
    )


def create_settings_from_dict(data: Optional[Dict[str, Any]]) -> AppSettings:
    """Create AppSettings from dictionary data."""
    data = data or {}
    return AppSettings(
        discounts=_level_mapping(data.get("discounts"), "discounts"),
        deadline=_parse_date(data.get("deadline")),
    )


def create_visit_plan_from_dict(data: Optional[Mapping[Any, Any]]) -> VisitPlan:
    """Create a visit plan from {"1": ["store-a", ...], ...}."""
    plan = {int(day): frozenset(str(i) for i in ids or []) for day, ids in (data or {}).items()}
    return MappingProxyType(plan)


def create_snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    """Create a Snapshot from the JSON document produced by Snapshot.to_dict()."""
    return Snapshot(
        stores=tuple(create_store_from_dict(s) for s in data.get("stores", [])),
        products=tuple(create_product_from_dict(p) for p in data.get("products", [])),
        sales=tuple(create_sale_from_dict(s) for s in data.get("sales", [])),
        visit_plan=create_visit_plan_from_dict(data.get("visit_plan", data.get("dailyVisitPlan"))),
        settings=create_settings_from_dict(data.get("settings")),
        version=int(data.get("version", 0)),
    )
