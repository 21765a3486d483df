"""Tests for the in-memory snapshot repository."""

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.models.enums import ProductType, StoreLevel
from src.models.errors import EntityNotFoundError, ValidationFailedError


class TestSnapshotView:

    def test_snapshot_reflects_seed(self, repository):
        snapshot = repository.snapshot()
        assert [s.id for s in snapshot.stores] == ["s1", "s2", "s3"]
        assert len(snapshot.products) == 4
        assert len(snapshot.sales) == 4
        assert snapshot.version == 1

    def test_snapshots_are_independent_of_later_mutations(self, repository):
        before = repository.snapshot()
        repository.add_store("Toko Baru", StoreLevel.OTHERS)
        assert len(before.stores) == 3
        assert len(repository.snapshot().stores) == 4


class TestStores:

    def test_add_store_bumps_version(self, repository):
        store = repository.add_store("  Toko Baru ", StoreLevel.WS2)
        assert store.name == "Toko Baru"
        assert repository.get_store(store.id) == store
        assert repository.version == 2

    def test_add_store_rejects_empty_name(self, repository):
        with pytest.raises(ValidationFailedError) as exc_info:
            repository.add_store("   ", StoreLevel.RITEL)
        assert exc_info.value.result.errors[0].field == "name"
        assert repository.version == 1

    def test_update_store(self, repository):
        store = repository.get_store("s2")
        updated = repository.update_store(replace(store, level=StoreLevel.RITEL_L))
        assert repository.get_store("s2").level == StoreLevel.RITEL_L
        assert updated.name == store.name

    def test_update_missing_store(self, repository):
        store = replace(repository.get_store("s2"), id="nope")
        with pytest.raises(EntityNotFoundError):
            repository.update_store(store)

    def test_delete_store_cascades(self, repository):
        repository.delete_store("s1")
        snapshot = repository.snapshot()
        assert repository.get_store("s1") is None
        assert all(sale.store_id != "s1" for sale in snapshot.sales)
        assert snapshot.visit_plan[1] == frozenset({"s3"})

    def test_delete_missing_store(self, repository):
        with pytest.raises(EntityNotFoundError):
            repository.delete_store("nope")

    def test_bulk_add_is_all_or_nothing(self, repository):
        with pytest.raises(ValidationFailedError):
            repository.bulk_add_stores([("Toko A", StoreLevel.RITEL), ("", StoreLevel.WS1)])
        assert len(repository.list_stores()) == 3

    def test_bulk_add_single_version_bump(self, repository):
        added = repository.bulk_add_stores([("Toko A", StoreLevel.RITEL), ("Toko B", StoreLevel.WS1)])
        assert len(added) == 2
        assert len({s.id for s in added}) == 2
        assert repository.version == 2


class TestProducts:

    def test_add_product(self, repository):
        product = repository.add_product("Susu", ProductType.FOKUS, base_price=8000,
                                         target_coverage={StoreLevel.WS1: 50})
        assert repository.get_product(product.id).target_coverage == {StoreLevel.WS1: 50}

    @pytest.mark.parametrize("kwargs", [
        {"base_price": -1},
        {"target_coverage": {StoreLevel.RITEL: 120}},
        {"target_coverage": {StoreLevel.RITEL: -5}},
    ])
    def test_add_product_rejects_invalid(self, repository, kwargs):
        with pytest.raises(ValidationFailedError):
            repository.add_product("Susu", ProductType.DD, **kwargs)

    def test_update_product(self, repository):
        product = repository.get_product("p-none")
        repository.update_product(replace(product, is_active=False))
        assert repository.get_product("p-none").is_active is False

    def test_delete_product_cascades_to_sales(self, repository):
        repository.delete_product("p-dd")
        assert repository.get_product("p-dd") is None
        assert all(sale.product_id != "p-dd" for sale in repository.snapshot().sales)


class TestSales:

    def test_log_sale_uses_clock(self, repository):
        sale = repository.log_sale("s2", "p-dd")
        assert sale.date == datetime(2025, 6, 11, 12, 0)
        assert sale.quantity == 1
        assert repository.find_sale("s2", "p-dd") == sale
        assert repository.version == 2

    def test_log_sale_is_idempotent_per_pair(self, repository):
        first = repository.log_sale("s2", "p-dd")
        second = repository.log_sale("s2", "p-dd", quantity=3)
        assert second == first
        assert repository.version == 2

    def test_log_sale_unknown_references(self, repository):
        with pytest.raises(EntityNotFoundError):
            repository.log_sale("nope", "p-dd")
        with pytest.raises(EntityNotFoundError):
            repository.log_sale("s1", "nope")

    def test_log_sale_rejects_bad_quantity(self, repository):
        with pytest.raises(ValidationFailedError):
            repository.log_sale("s2", "p-none", quantity=0)

    def test_delete_sale(self, repository):
        assert repository.delete_sale("s1", "p-dd") == 1
        assert repository.find_sale("s1", "p-dd") is None
        assert repository.version == 2

    def test_delete_missing_sale_keeps_version(self, repository):
        assert repository.delete_sale("s2", "p-dd") == 0
        assert repository.version == 1


class TestVisitPlanAndSettings:

    def test_set_visit_plan(self, repository):
        plan = repository.set_visit_plan(2, ["s2", "s3"])
        assert plan[2] == frozenset({"s2", "s3"})
        assert repository.snapshot().visit_plan[2] == frozenset({"s2", "s3"})

    def test_set_visit_plan_unknown_store(self, repository):
        with pytest.raises(EntityNotFoundError):
            repository.set_visit_plan(2, ["ghost"])

    def test_set_visit_plan_invalid_day(self, repository):
        with pytest.raises(ValueError):
            repository.set_visit_plan(7, ["s1"])

    def test_update_settings_merges_discounts(self, repository):
        settings = repository.update_settings(discounts={StoreLevel.WS2: 15})
        assert settings.discounts == {StoreLevel.RITEL: 10, StoreLevel.WS1: 20, StoreLevel.WS2: 15}
        assert settings.deadline == date(2025, 6, 15)

    def test_update_settings_deadline(self, repository):
        assert repository.update_settings(deadline=date(2025, 7, 1)).deadline == date(2025, 7, 1)
        assert repository.update_settings(clear_deadline=True).deadline is None

    def test_update_settings_rejects_bad_discount(self, repository):
        with pytest.raises(ValidationFailedError):
            repository.update_settings(discounts={StoreLevel.WS1: 101})
        assert repository.snapshot().settings.discount_for(StoreLevel.WS1) == 20
