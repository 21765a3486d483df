"""Abstract repository interfaces."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, List, Iterable, Tuple, Mapping

from ..models.entities import Store, Product, Sale, Snapshot, VisitPlan, AppSettings
from ..models.enums import StoreLevel, ProductType


class SnapshotRepository(ABC):
    """
    Single owner of the sales monitor state.
    Every mutation goes through here and bumps `version`.
    """

    @property
    @abstractmethod
    def version(self) -> int:
        """Mutation counter; changes whenever the snapshot would differ."""
        pass

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """Return an immutable view of the current state."""
        pass

    # Stores

    @abstractmethod
    def get_store(self, store_id: str) -> Optional[Store]:
        pass

    @abstractmethod
    def add_store(self, name: str, level: StoreLevel) -> Store:
        """Add a store and return it with assigned ID."""
        pass

    @abstractmethod
    def update_store(self, store: Store) -> Store:
        pass

    @abstractmethod
    def delete_store(self, store_id: str) -> None:
        """Delete a store together with its sales and visit plan entries."""
        pass

    @abstractmethod
    def bulk_add_stores(self, rows: Iterable[Tuple[str, StoreLevel]]) -> List[Store]:
        pass

    # Products

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def add_product(self, name: str, product_type: ProductType, base_price: float = 0.0,
                    is_active: bool = True,
                    target_coverage: Optional[Mapping[StoreLevel, float]] = None) -> Product:
        pass

    @abstractmethod
    def update_product(self, product: Product) -> Product:
        pass

    @abstractmethod
    def delete_product(self, product_id: str) -> None:
        pass

    # Sales

    @abstractmethod
    def log_sale(self, store_id: str, product_id: str, quantity: int = 1,
                 when: Optional[datetime] = None) -> Sale:
        """Record a checklist check. Re-logging an existing pair is a no-op."""
        pass

    @abstractmethod
    def delete_sale(self, store_id: str, product_id: str) -> int:
        """Remove every sale of the pair. Returns count deleted."""
        pass

    # Plan & settings

    @abstractmethod
    def set_visit_plan(self, day: int, store_ids: Iterable[str]) -> VisitPlan:
        pass

    @abstractmethod
    def update_settings(self, discounts: Optional[Mapping[StoreLevel, float]] = None,
                        deadline: Optional[date] = None, clear_deadline: bool = False) -> AppSettings:
        pass
