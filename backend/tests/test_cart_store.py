"""
Unit tests for the in-memory cart store

These tests exercise utils/cart_store.py directly, without the API or a
database: line identity, merge rules, quantity updates and totals.
"""
import logging

import pytest

from schemas.cart import (
    AccessoryLineItem, FabricLineItem, Measurements, ReadymadeLineItem, StitchingSpecification,
)
from utils.cart_store import CartStore, identity_of, item_total


def readymade(product_id=1, size="M", quantity=1, price=50.0):
    return ReadymadeLineItem(
        product_id=product_id, name="Classic White Thobe", image="thobe.jpg",
        quantity=quantity, size=size, price=price,
    )


def fabric(product_id=2, meters=3.0, quantity=1, price_per_meter=15.0, stitching_price=None):
    stitching = None
    if stitching_price is not None:
        stitching = StitchingSpecification(
            style="Kurta",
            measurements=Measurements(
                neck=15.5, chest=40, waist=34, shoulder=18, sleeve_length=24, shirt_length=42,
            ),
            notes="Extra pocket",
            stitching_price=stitching_price,
        )
    return FabricLineItem(
        product_id=product_id, name="Egyptian Cotton Fabric", image="cotton.jpg",
        quantity=quantity, price_per_meter=price_per_meter, meters=meters, stitching=stitching,
    )


def accessory(product_id=3, quantity=1, price=25.0):
    return AccessoryLineItem(
        product_id=product_id, name="Royal Oudh Attar", image="attar.jpg",
        quantity=quantity, price=price,
    )


class TestIdentity:
    def test_readymade_identity_includes_size(self):
        assert identity_of(readymade(product_id=7, size="XL")) == "7-XL"

    def test_plain_fabric_and_accessory_use_product_id(self):
        assert identity_of(fabric(product_id=2)) == "2"
        assert identity_of(accessory(product_id=3)) == "3"

    def test_stitched_fabric_identity_is_unique_per_call(self):
        item = fabric(product_id=2, stitching_price=35)

        first, second = identity_of(item), identity_of(item)

        assert first != second
        assert first.startswith("2-custom-")

    def test_unknown_item_type_is_rejected(self):
        with pytest.raises(TypeError):
            identity_of(object())


class TestAddItem:
    def test_readymade_same_size_merges_quantities(self):
        store = CartStore()

        store.add_item(readymade(size="M", quantity=2))
        store.add_item(readymade(size="M", quantity=1))
        store.add_item(readymade(size="M", quantity=4))

        assert len(store.items) == 1
        assert store.items[0].id == "1-M"
        assert store.items[0].quantity == 7

    def test_readymade_different_sizes_are_separate_lines(self):
        store = CartStore()

        store.add_item(readymade(size="M"))
        store.add_item(readymade(size="L"))

        assert [it.id for it in store.items] == ["1-M", "1-L"]

    def test_merge_keeps_existing_price_snapshot(self):
        store = CartStore()

        store.add_item(readymade(quantity=1, price=50))
        store.add_item(readymade(quantity=1, price=80))

        assert store.items[0].price == 50
        assert store.items[0].quantity == 2

    def test_plain_fabric_merges(self):
        store = CartStore()

        store.add_item(fabric(quantity=1))
        store.add_item(fabric(quantity=2))

        assert len(store.items) == 1
        assert store.items[0].quantity == 3

    def test_accessory_merges(self):
        store = CartStore()

        store.add_item(accessory(quantity=1))
        store.add_item(accessory(quantity=1))

        assert len(store.items) == 1
        assert store.items[0].quantity == 2

    def test_identical_stitched_fabrics_never_merge(self):
        store = CartStore()

        store.add_item(fabric(meters=2, stitching_price=35))
        store.add_item(fabric(meters=2, stitching_price=35))

        assert len(store.items) == 2
        assert store.items[0].id != store.items[1].id
        assert all(it.quantity == 1 for it in store.items)

    def test_added_line_is_a_copy_with_identity_set(self):
        store = CartStore()
        item = accessory()

        added = store.add_item(item)

        assert added is not item
        assert item.id == ""
        assert added.id == "3"

    def test_insertion_order_is_preserved(self):
        store = CartStore()

        store.add_item(accessory())
        store.add_item(readymade())
        store.add_item(fabric())
        store.add_item(accessory())

        assert [it.type for it in store.items] == ["accessory", "readymade", "fabric"]


class TestQuantityAndRemoval:
    @pytest.mark.parametrize("quantity", [0, -5])
    def test_non_positive_quantity_removes_item(self, quantity):
        store = CartStore()
        store.add_item(readymade(size="S"))
        store.add_item(accessory())

        store.update_quantity("1-S", quantity)

        assert [it.id for it in store.items] == ["3"]

    def test_update_quantity_sets_value(self):
        store = CartStore()
        store.add_item(readymade(quantity=2))

        store.update_quantity("1-M", 5)

        assert store.items[0].quantity == 5
        assert store.items[0].price == 50

    def test_update_unknown_identity_is_noop(self):
        store = CartStore()
        store.add_item(accessory())

        store.update_quantity("missing", 4)

        assert store.items[0].quantity == 1

    def test_remove_unknown_identity_leaves_cart_unchanged(self):
        store = CartStore()
        store.add_item(readymade(quantity=2))
        store.add_item(fabric())
        total_before = store.cart_total()

        store.remove_item("does-not-exist")

        assert len(store.items) == 2
        assert store.cart_total() == total_before

    def test_clear_cart_empties_everything(self):
        store = CartStore()
        store.add_item(readymade())
        store.add_item(fabric(stitching_price=35))

        store.clear_cart()

        assert store.items == []
        assert store.cart_total() == 0
        assert store.total_item_count() == 0


class TestTotals:
    def test_scenario_readymade_merge_total(self):
        store = CartStore()

        store.add_item(readymade(size="M", quantity=2, price=50))
        assert store.cart_total() == pytest.approx(100.00)

        store.add_item(readymade(size="M", quantity=1, price=50))
        assert len(store.items) == 1
        assert store.items[0].quantity == 3
        assert store.cart_total() == pytest.approx(150.00)

    def test_scenario_plain_and_stitched_fabric(self):
        store = CartStore()

        plain = store.add_item(fabric(meters=3, quantity=1, price_per_meter=15))
        assert item_total(plain) == pytest.approx(45.00)

        stitched = store.add_item(fabric(meters=2, quantity=1, price_per_meter=15, stitching_price=35))

        assert len(store.items) == 2
        assert item_total(stitched) == pytest.approx(65.00)
        assert store.cart_total() == pytest.approx(110.00)

    def test_stitching_is_charged_per_quantity(self):
        line = fabric(meters=2, quantity=3, price_per_meter=15, stitching_price=35)

        assert item_total(line) == pytest.approx((15 * 2 + 35) * 3)

    def test_total_item_count_sums_quantities(self):
        store = CartStore()
        store.add_item(readymade(quantity=2))
        store.add_item(accessory(quantity=3))

        assert store.total_item_count() == 5

    def test_cart_total_matches_fresh_sum_after_mutations(self):
        store = CartStore()
        store.add_item(readymade(quantity=2))
        store.add_item(fabric(stitching_price=35))
        store.add_item(accessory(quantity=4))
        store.update_quantity("1-M", 6)
        store.remove_item("3")

        assert store.cart_total() == pytest.approx(sum(item_total(it) for it in store.items))


class TestChangeCallback:
    def test_every_mutation_publishes_full_item_list(self):
        published = []
        store = CartStore(on_change=published.append)

        store.add_item(readymade())
        store.add_item(readymade())
        store.update_quantity("1-M", 5)
        store.remove_item("1-M")

        assert [len(items) for items in published] == [1, 1, 1, 0]

    def test_noop_operations_do_not_publish(self):
        published = []
        store = CartStore(on_change=published.append)

        store.remove_item("missing")
        store.update_quantity("missing", 3)

        assert published == []

    def test_failing_sync_does_not_break_the_operation(self, caplog):
        def broken_sync(items):
            raise RuntimeError("storage down")

        store = CartStore(on_change=broken_sync)

        with caplog.at_level(logging.ERROR):
            store.add_item(accessory(quantity=2))

        assert store.total_item_count() == 2
        assert "Cart sync failed" in caplog.text

    def test_store_starts_from_persisted_items(self):
        saved = [readymade(quantity=2).model_copy(update={"id": "1-M"})]

        store = CartStore(saved)
        store.add_item(readymade(quantity=1))

        assert len(store.items) == 1
        assert store.items[0].quantity == 3
