"""
In-memory snapshot repository.

Holds stores, products, sales, the visit plan and settings for one field
agent, validates every mutation and hands out immutable Snapshot views.
"""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from src.models.entities import AppSettings, Product, Sale, Snapshot, Store, VisitPlan
from src.models.enums import ProductType, StoreLevel
from src.models.errors import EntityNotFoundError, ValidationFailedError
from src.models.validators import ProductValidator, SaleValidator, SettingsValidator, StoreValidator
from src.repositories.interfaces import SnapshotRepository
from src.services.visit_plan_service import replace_day_plan

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemorySnapshotRepository(SnapshotRepository):
    """Repository keeping the whole state in process memory."""

    def __init__(self, snapshot: Optional[Snapshot] = None,
                 clock: Callable[[], datetime] = datetime.now):
        snapshot = snapshot or Snapshot()
        self._stores: Dict[str, Store] = {s.id: s for s in snapshot.stores}
        self._products: Dict[str, Product] = {p.id: p for p in snapshot.products}
        self._sales: List[Sale] = list(snapshot.sales)
        self._visit_plan: VisitPlan = MappingProxyType(dict(snapshot.visit_plan))
        self._settings: AppSettings = snapshot.settings
        self._version = snapshot.version
        self._clock = clock

        self.store_validator = StoreValidator()
        self.product_validator = ProductValidator()
        self.sale_validator = SaleValidator()
        self.settings_validator = SettingsValidator()

    @property
    def version(self) -> int:
        return self._version

    def _touch(self) -> None:
        self._version += 1

    def snapshot(self) -> Snapshot:
        return Snapshot(
            stores=tuple(self._stores.values()),
            products=tuple(self._products.values()),
            sales=tuple(self._sales),
            visit_plan=self._visit_plan,
            settings=self._settings,
            version=self._version,
        )

    # =========================================================================
    # Stores
    # =========================================================================

    def _check(self, validator, obj) -> None:
        result = validator.validate(obj)
        if not result.is_valid():
            raise ValidationFailedError(result)

    def _require_store(self, store_id: str) -> Store:
        store = self._stores.get(store_id)
        if store is None:
            raise EntityNotFoundError(f"Store not found: {store_id}")
        return store

    def list_stores(self) -> List[Store]:
        return list(self._stores.values())

    def get_store(self, store_id: str) -> Optional[Store]:
        return self._stores.get(store_id)

    def add_store(self, name: str, level: StoreLevel) -> Store:
        store = Store(id=_new_id(), name=(name or "").strip(), level=level)
        self._check(self.store_validator, store)
        self._stores[store.id] = store
        self._touch()
        logger.info(f"Added store {store.name} ({store.level.value})")
        return store

    def update_store(self, store: Store) -> Store:
        self._require_store(store.id)
        store = replace(store, name=(store.name or "").strip())
        self._check(self.store_validator, store)
        self._stores[store.id] = store
        self._touch()
        logger.info(f"Updated store {store.id}")
        return store

    def delete_store(self, store_id: str) -> None:
        self._require_store(store_id)
        del self._stores[store_id]
        before = len(self._sales)
        self._sales = [s for s in self._sales if s.store_id != store_id]
        self._visit_plan = MappingProxyType({
            day: ids - {store_id} for day, ids in self._visit_plan.items()
        })
        self._touch()
        logger.info(f"Deleted store {store_id} and {before - len(self._sales)} sale(s)")

    def bulk_add_stores(self, rows: Iterable[Tuple[str, StoreLevel]]) -> List[Store]:
        stores = [Store(id=_new_id(), name=(name or "").strip(), level=level) for name, level in rows]
        for store in stores:
            self._check(self.store_validator, store)
        for store in stores:
            self._stores[store.id] = store
        if stores:
            self._touch()
        logger.info(f"Bulk added {len(stores)} store(s)")
        return stores

    # =========================================================================
    # Products
    # =========================================================================

    def _require_product(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: {product_id}")
        return product

    def list_products(self) -> List[Product]:
        return list(self._products.values())

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def add_product(self, name: str, product_type: ProductType, base_price: float = 0.0,
                    is_active: bool = True,
                    target_coverage: Optional[Mapping[StoreLevel, float]] = None) -> Product:
        product = Product(
            id=_new_id(),
            name=(name or "").strip(),
            type=product_type,
            base_price=base_price,
            is_active=is_active,
            target_coverage=dict(target_coverage or {}),
        )
        self._check(self.product_validator, product)
        self._products[product.id] = product
        self._touch()
        logger.info(f"Added {product.type.value} product {product.name}")
        return product

    def update_product(self, product: Product) -> Product:
        self._require_product(product.id)
        product = replace(product, target_coverage=dict(product.target_coverage))
        self._check(self.product_validator, product)
        self._products[product.id] = product
        self._touch()
        return product

    def delete_product(self, product_id: str) -> None:
        self._require_product(product_id)
        del self._products[product_id]
        self._sales = [s for s in self._sales if s.product_id != product_id]
        self._touch()
        logger.info(f"Deleted product {product_id}")

    # =========================================================================
    # Sales
    # =========================================================================

    def find_sale(self, store_id: str, product_id: str) -> Optional[Sale]:
        for sale in self._sales:
            if sale.pair == (store_id, product_id):
                return sale
        return None

    def log_sale(self, store_id: str, product_id: str, quantity: int = 1,
                 when: Optional[datetime] = None) -> Sale:
        self._require_store(store_id)
        self._require_product(product_id)

        existing = self.find_sale(store_id, product_id)
        if existing is not None:
            logger.debug(f"Sale already logged for store={store_id} product={product_id}")
            return existing

        sale = Sale(store_id=store_id, product_id=product_id, quantity=quantity,
                    date=when or self._clock())
        self._check(self.sale_validator, sale)
        self._sales.append(sale)
        self._touch()
        logger.info(f"Logged sale store={store_id} product={product_id}")
        return sale

    def delete_sale(self, store_id: str, product_id: str) -> int:
        before = len(self._sales)
        self._sales = [s for s in self._sales if s.pair != (store_id, product_id)]
        removed = before - len(self._sales)
        if removed:
            self._touch()
            logger.info(f"Deleted {removed} sale(s) store={store_id} product={product_id}")
        return removed

    # =========================================================================
    # Visit plan & settings
    # =========================================================================

    def set_visit_plan(self, day: int, store_ids: Iterable[str]) -> VisitPlan:
        store_ids = list(store_ids)
        unknown = [i for i in store_ids if i not in self._stores]
        if unknown:
            raise EntityNotFoundError(f"Unknown store id(s) in visit plan: {', '.join(unknown)}")
        self._visit_plan = replace_day_plan(self._visit_plan, day, store_ids)
        self._touch()
        logger.info(f"Visit plan for day {day} set to {len(store_ids)} store(s)")
        return self._visit_plan

    def update_settings(self, discounts: Optional[Mapping[StoreLevel, float]] = None,
                        deadline: Optional[date] = None, clear_deadline: bool = False) -> AppSettings:
        settings = self._settings
        if discounts is not None:
            merged = dict(settings.discounts)
            merged.update(discounts)
            settings = replace(settings, discounts=merged)
        if clear_deadline:
            settings = replace(settings, deadline=None)
        elif deadline is not None:
            settings = replace(settings, deadline=deadline)

        self._check(self.settings_validator, settings)
        self._settings = settings
        self._touch()
        logger.info("Settings updated")
        return settings
