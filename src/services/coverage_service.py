"""
Coverage Service - per-tier coverage targets for checklist products.

A product's target is met when, in every store level named by its
target_coverage, at least ceil(stores_in_level * percent / 100) stores
have a recorded sale of the product. Levels without stores are skipped.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from src.models.entities import Product, Sale, Store
from src.models.enums import ProductType, StoreLevel
from src.models.dashboard import CoverageStatus, LevelCoverage, TargetSummary

logger = logging.getLogger(__name__)


def achieved_pairs(sales: Iterable[Sale]) -> Set[Tuple[str, str]]:
    """(store_id, product_id) pairs with at least one sale."""
    return {sale.pair for sale in sales}


def stores_by_level(stores: Iterable[Store]) -> Dict[StoreLevel, List[Store]]:
    grouped: Dict[StoreLevel, List[Store]] = defaultdict(list)
    for store in stores:
        grouped[store.level].append(store)
    return grouped


def required_store_count(store_count: int, percent: float) -> int:
    """Stores needed to clear a percent target; rounds up (1% of 3 stores is 1)."""
    return math.ceil(store_count * percent / 100)


def _level_coverage(product: Product, level: StoreLevel, percent: float,
                    level_stores: Sequence[Store], pairs: Set[Tuple[str, str]]) -> LevelCoverage:
    achieved = sum(1 for store in level_stores if (store.id, product.id) in pairs)
    return LevelCoverage(
        level=level,
        percent=percent,
        store_count=len(level_stores),
        required_count=required_store_count(len(level_stores), percent),
        achieved_count=achieved,
    )


def is_product_target_met(product: Product, stores: Sequence[Store], sales: Iterable[Sale]) -> bool:
    """
    Decide whether a product's tiered coverage target is satisfied.

    Args:
        product: Product with its target_coverage mapping
        stores: All stores in the snapshot
        sales: All sale records; dangling references simply never match

    Returns:
        False for a product without targets, otherwise True only when every
        populated level clears its own bar (no cross-level averaging)
    """
    if not product.target_coverage:
        return False

    grouped = stores_by_level(stores)
    pairs = achieved_pairs(sales)
    for level, percent in product.target_coverage.items():
        level_stores = grouped.get(level, [])
        if not level_stores:
            continue
        coverage = _level_coverage(product, level, percent or 0, level_stores, pairs)
        if coverage.achieved_count < coverage.required_count:
            return False
    return True


def evaluate_product(product: Product, stores: Sequence[Store], sales: Iterable[Sale]) -> CoverageStatus:
    """Full per-level breakdown for progress charts."""
    grouped = stores_by_level(stores)
    pairs = achieved_pairs(sales)
    levels = [
        _level_coverage(product, level, percent or 0, grouped.get(level, []), pairs)
        for level, percent in product.target_coverage.items()
    ]
    return CoverageStatus(product=product, levels=levels)


def count_targets_met(products: Iterable[Product], stores: Sequence[Store],
                      sales: Iterable[Sale]) -> TargetSummary:
    """
    Bucket active products whose coverage target is met by type.
    Inactive products are ignored entirely.
    """
    sales = list(sales)
    active = [p for p in products if p.is_active]
    dd_met = fokus_met = 0

    for product in active:
        if not product.target_coverage:
            logger.debug(f"Product {product.id} has no coverage target, skipping")
            continue
        if not is_product_target_met(product, stores, sales):
            continue
        if product.type == ProductType.DD:
            dd_met += 1
        else:
            fokus_met += 1

    return TargetSummary(
        dd_targets_met=dd_met,
        fokus_targets_met=fokus_met,
        dd_product_count=sum(1 for p in active if p.type == ProductType.DD),
        fokus_product_count=sum(1 for p in active if p.type == ProductType.FOKUS),
    )
