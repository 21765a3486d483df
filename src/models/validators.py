"""
Business rule validators for the sales monitor.
Separated from data models for clean architecture.
"""

from typing import Mapping

from .entities import ValidationResult, Store, Product, Sale, AppSettings
from .enums import StoreLevel


class StoreValidator:
    """Validates store data before it enters the snapshot."""

    def validate(self, store: Store) -> ValidationResult:
        result = ValidationResult()
        if not store.name or not store.name.strip():
            result.add_error("name", "Store name is required", "REQUIRED_FIELD")
        if not isinstance(store.level, StoreLevel):
            result.add_error("level", f"Invalid store level: {store.level}", "INVALID_ENUM_VALUE")
        return result


class ProductValidator:
    """Validates product data according to business rules."""

    def validate(self, product: Product) -> ValidationResult:
        """Validate a product and return validation result."""
        result = ValidationResult()

        if not product.name or not product.name.strip():
            result.add_error("name", "Product name is required", "REQUIRED_FIELD")

        if product.base_price is None or product.base_price < 0:
            result.add_error("base_price", "Base price cannot be negative", "INVALID_FINANCIAL_VALUE")

        _validate_percentages(product.target_coverage, "target_coverage", result)

        if product.is_active and not product.target_coverage:
            result.add_warning("target_coverage",
                               "Active product has no coverage target and will never count as met",
                               "NO_TARGET")
        return result


class SaleValidator:
    """Validates a checklist sale record."""

    def validate(self, sale: Sale) -> ValidationResult:
        result = ValidationResult()
        if not sale.store_id:
            result.add_error("store_id", "Store id is required", "REQUIRED_FIELD")
        if not sale.product_id:
            result.add_error("product_id", "Product id is required", "REQUIRED_FIELD")
        if sale.quantity is None or sale.quantity < 1:
            result.add_error("quantity", "Quantity must be at least 1", "INVALID_QUANTITY")
        return result


class SettingsValidator:
    """Validates discount rates."""

    def validate(self, settings: AppSettings) -> ValidationResult:
        result = ValidationResult()
        _validate_percentages(settings.discounts, "discounts", result)
        return result


def _validate_percentages(values: Mapping[StoreLevel, float], field_name: str,
                          result: ValidationResult) -> None:
    for level, pct in values.items():
        if pct is None or not (0 <= pct <= 100):
            result.add_error(field_name,
                             f"{level.value}: percentage must be between 0 and 100 (got {pct})",
                             "INVALID_PERCENTAGE")
