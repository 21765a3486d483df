"""
Store checklist: which active products a store has achieved, with the
store-level discount applied to each product's base price.
"""

from typing import Iterable, List, Sequence

from src.models.entities import AppSettings, Product, Sale, Store
from src.models.enums import ProductType
from src.models.dashboard import ChecklistItem, StoreProgress


def _store_product_ids(store: Store, sales: Iterable[Sale]) -> set:
    return {sale.product_id for sale in sales if sale.store_id == store.id}


def _active_by_type(products: Iterable[Product], product_type: ProductType) -> List[Product]:
    return [p for p in products if p.is_active and p.type == product_type]


def discounted_price(base_price: float, discount_percent: float) -> float:
    return base_price * (1 - discount_percent / 100)


def store_progress(store: Store, products: Sequence[Product], sales: Iterable[Sale]) -> StoreProgress:
    """Achieved / total active products per type for a single store."""
    achieved = _store_product_ids(store, sales)
    dd_products = _active_by_type(products, ProductType.DD)
    fokus_products = _active_by_type(products, ProductType.FOKUS)
    return StoreProgress(
        store=store,
        dd_achieved=sum(1 for p in dd_products if p.id in achieved),
        dd_total=len(dd_products),
        fokus_achieved=sum(1 for p in fokus_products if p.id in achieved),
        fokus_total=len(fokus_products),
    )


def store_checklist(store: Store, products: Sequence[Product], sales: Iterable[Sale],
                    settings: AppSettings) -> List[ChecklistItem]:
    """
    Checklist lines for a store, DD products first, then Fokus.

    Args:
        store: Store being visited
        products: All products; inactive ones are left out
        sales: All sale records
        settings: Discount rates per store level (missing level = no discount)

    Returns:
        ChecklistItem per active product
    """
    achieved = _store_product_ids(store, sales)
    discount = settings.discount_for(store.level)
    items = []
    for product_type in (ProductType.DD, ProductType.FOKUS):
        for product in _active_by_type(products, product_type):
            items.append(ChecklistItem(
                product=product,
                is_checked=product.id in achieved,
                discount_percent=discount,
                final_price=discounted_price(product.base_price, discount),
            ))
    return items
