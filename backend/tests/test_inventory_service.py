# Overview: Pytest coverage for inventory service behavior (stock, delete, sell, revert).

from datetime import timedelta

import pytest

from stockbook.extensions import db
from stockbook.models import Item
from stockbook.services import inventory_service
from stockbook.services.inventory_tree import available_count
from stockbook.time_utils import shop_today
from stockbook.validation import ConflictError, NotFoundError, ValidationError
from conftest import item_numbers


def _item(sub_category_id, number):
    return db.session.query(Item).filter_by(sub_category_id=sub_category_id, item_number=number).one()


def _today(app):
    return shop_today(app.config["SHOP_TIMEZONE"])


class TestCatalog:

    def test_prices_stored_in_cents(self, stocked):
        spark = stocked["spark"]
        assert spark.buying_price_cents == 8000
        assert spark.selling_price_cents == 15000

    def test_blank_prices_are_zero(self, boss):
        category = inventory_service.create_category(boss, "Radios")
        sub = inventory_service.create_sub_category(boss, category.id, name="FM", buying_price="", selling_price=None)
        assert sub.buying_price_cents == 0
        assert sub.selling_price_cents == 0

    def test_non_numeric_price_rejected(self, boss):
        category = inventory_service.create_category(boss, "Radios")
        with pytest.raises(ValidationError):
            inventory_service.create_sub_category(boss, category.id, name="FM", selling_price="abc")

    def test_blank_category_name_rejected(self, boss):
        with pytest.raises(ValidationError):
            inventory_service.create_category(boss, "   ")

    def test_update_sub_category(self, boss, stocked):
        sub = inventory_service.update_sub_category(
            boss, stocked["spark"].id, name="Spark 20", buying_price="85.5", selling_price="160"
        )
        assert sub.name == "Spark 20"
        assert sub.buying_price_cents == 8550
        assert sub.selling_price_cents == 16000

    def test_other_boss_cannot_touch_category(self, other_boss, stocked):
        with pytest.raises(NotFoundError):
            inventory_service.rename_category(other_boss, stocked["category"].id, "Mine")


class TestAddStock:

    def test_batch_continues_numbering(self, boss, stocked):
        itel = stocked["itel"]
        inventory_service.add_stock(boss, itel.id, 1)
        assert item_numbers(itel.id) == [1, 2, 3]
        inventory_service.add_stock(boss, itel.id, 2)
        assert item_numbers(itel.id) == [1, 2, 3, 4, 5]

    def test_new_items_are_available(self, boss, stocked):
        items = inventory_service.add_stock(boss, stocked["itel"].id, 2)
        assert all(item.status == "available" and item.sold_date is None for item in items)

    @pytest.mark.parametrize("quantity", [0, -3, "2.5", "abc", None, 1.5, True])
    def test_invalid_quantity_writes_nothing(self, boss, stocked, quantity):
        with pytest.raises(ValidationError):
            inventory_service.add_stock(boss, stocked["itel"].id, quantity)
        assert item_numbers(stocked["itel"].id) == [1, 2]

    def test_worker_adds_to_boss_tree(self, worker, stocked):
        # Service layer is capability-agnostic; routes gate ADD_STOCK
        inventory_service.add_stock(worker, stocked["itel"].id, 1)
        assert item_numbers(stocked["itel"].id) == [1, 2, 3]


class TestDeleteItem:

    def test_delete_renumbers_remaining(self, boss, stocked):
        spark = stocked["spark"]
        target = _item(spark.id, 2)
        keep_ids = [_item(spark.id, n).id for n in (1, 3, 4, 5)]

        inventory_service.delete_item(boss, target.id)

        assert item_numbers(spark.id) == [1, 2, 3, 4]
        renumbered = [db.session.get(Item, item_id).item_number for item_id in keep_ids]
        assert renumbered == [1, 2, 3, 4]

    def test_delete_last_item_changes_nothing_else(self, boss, stocked):
        itel = stocked["itel"]
        first_id = _item(itel.id, 1).id
        inventory_service.delete_item(boss, _item(itel.id, 2).id)
        assert item_numbers(itel.id) == [1]
        assert _item(itel.id, 1).id == first_id

    def test_sold_status_survives_renumbering(self, app, boss, stocked):
        spark = stocked["spark"]
        sold = inventory_service.sell_item(boss, _item(spark.id, 4).id)
        inventory_service.delete_item(boss, _item(spark.id, 1).id)
        moved = db.session.get(Item, sold.id)
        assert moved.item_number == 3
        assert moved.status == "sold"
        assert moved.sold_date == _today(app)

    def test_unknown_item(self, boss, stocked):
        with pytest.raises(NotFoundError):
            inventory_service.delete_item(boss, 99999)

    def test_other_boss_cannot_delete(self, other_boss, stocked):
        spark = stocked["spark"]
        with pytest.raises(NotFoundError):
            inventory_service.delete_item(other_boss, _item(spark.id, 1).id)
        assert item_numbers(spark.id) == [1, 2, 3, 4, 5]

    def test_failed_renumber_rolls_back_delete(self, boss, stocked, monkeypatch):
        spark = stocked["spark"]

        def boom(sub_category_id):
            raise RuntimeError("renumber failed")

        monkeypatch.setattr(inventory_service, "_apply_renumber", boom)
        with pytest.raises(RuntimeError):
            inventory_service.delete_item(boss, _item(spark.id, 2).id)
        assert item_numbers(spark.id) == [1, 2, 3, 4, 5]


class TestResequence:

    def test_repairs_gaps(self, boss, stocked):
        spark = stocked["spark"]
        # Simulate a gap left by an interrupted legacy delete
        db.session.delete(_item(spark.id, 3))
        db.session.commit()
        assert item_numbers(spark.id) == [1, 2, 4, 5]

        assert inventory_service.resequence_sub_category(spark.id) == 2
        assert item_numbers(spark.id) == [1, 2, 3, 4]
        assert inventory_service.resequence_sub_category(spark.id) == 0


class TestSellAndRevert:

    def test_sell_defaults_to_today(self, app, boss, stocked):
        item = inventory_service.sell_item(boss, _item(stocked["spark"].id, 1).id)
        assert item.status == "sold"
        assert item.sold_date == _today(app)

    def test_sell_yesterday_allowed(self, app, boss, stocked):
        yesterday = _today(app) - timedelta(days=1)
        item = inventory_service.sell_item(boss, _item(stocked["spark"].id, 1).id, yesterday.isoformat())
        assert item.sold_date == yesterday

    @pytest.mark.parametrize("offset", [-2, 1])
    def test_sell_outside_window_rejected(self, app, boss, stocked, offset):
        day = _today(app) + timedelta(days=offset)
        item_id = _item(stocked["spark"].id, 1).id
        with pytest.raises(ValidationError):
            inventory_service.sell_item(boss, item_id, day.isoformat())
        assert db.session.get(Item, item_id).status == "available"

    def test_malformed_date_rejected(self, boss, stocked):
        with pytest.raises(ValidationError):
            inventory_service.sell_item(boss, _item(stocked["spark"].id, 1).id, "01/03/2026")

    def test_sell_twice_conflicts(self, boss, stocked):
        item_id = _item(stocked["spark"].id, 1).id
        inventory_service.sell_item(boss, item_id)
        with pytest.raises(ConflictError):
            inventory_service.sell_item(boss, item_id)

    def test_revert_clears_date(self, boss, stocked):
        item_id = _item(stocked["spark"].id, 1).id
        inventory_service.sell_item(boss, item_id)
        item = inventory_service.revert_sale(boss, item_id)
        assert item.status == "available"
        assert item.sold_date is None

    def test_revert_available_conflicts(self, boss, stocked):
        with pytest.raises(ConflictError):
            inventory_service.revert_sale(boss, _item(stocked["spark"].id, 1).id)


class TestLoadTree:

    def test_worker_sees_boss_tree_without_cost(self, worker, stocked):
        tree = inventory_service.load_tree(worker)
        assert [c.name for c in tree] == ["Phones"]
        subs = tree[0].sub_categories
        assert {s.name for s in subs} == {"Tecno Spark", "Itel A70"}
        assert all(s.buying_price_cents == 0 for s in subs)
        assert all(s.selling_price_cents > 0 for s in subs)

    def test_boss_sees_cost(self, boss, stocked):
        subs = inventory_service.load_tree(boss)[0].sub_categories
        assert {s.buying_price_cents for s in subs} == {8000, 5000}

    def test_search(self, boss, stocked):
        tree = inventory_service.load_tree(boss, "itel")
        assert [s.name for s in tree[0].sub_categories] == ["Itel A70"]

    def test_other_boss_sees_nothing(self, other_boss, stocked):
        assert inventory_service.load_tree(other_boss) == []


class TestScenarios:

    def test_add_two_after_three(self, boss):
        category = inventory_service.create_category(boss, "Radios")
        sub = inventory_service.create_sub_category(
            boss, category.id, name="FM", buying_price="50", selling_price="80"
        )
        inventory_service.add_stock(boss, sub.id, 3)
        created = inventory_service.add_stock(boss, sub.id, 2)
        assert [item.item_number for item in created] == [4, 5]
        assert all(item.status == "available" for item in created)
        assert item_numbers(sub.id) == [1, 2, 3, 4, 5]

    def test_delete_middle_of_three(self, boss):
        category = inventory_service.create_category(boss, "Radios")
        sub = inventory_service.create_sub_category(boss, category.id, name="FM")
        inventory_service.add_stock(boss, sub.id, 3)
        former_third = _item(sub.id, 3).id

        inventory_service.delete_item(boss, _item(sub.id, 2).id)

        assert item_numbers(sub.id) == [1, 2]
        assert db.session.get(Item, former_third).item_number == 2

    def test_numbers_stay_dense_through_mixed_operations(self, boss, stocked):
        spark = stocked["spark"]
        inventory_service.delete_item(boss, _item(spark.id, 5).id)
        inventory_service.add_stock(boss, spark.id, 3)
        inventory_service.delete_item(boss, _item(spark.id, 1).id)
        inventory_service.delete_item(boss, _item(spark.id, 3).id)
        inventory_service.add_stock(boss, spark.id, 1)
        assert item_numbers(spark.id) == [1, 2, 3, 4, 5, 6]

    def test_revert_counts_toward_availability_again(self, boss, stocked):
        itel = stocked["itel"]
        item_id = _item(itel.id, 1).id
        inventory_service.sell_item(boss, item_id)

        def itel_available():
            tree = inventory_service.load_tree(boss, "itel")
            return available_count(tree[0].sub_categories[0])

        assert itel_available() == 1
        inventory_service.revert_sale(boss, item_id)
        assert itel_available() == 2
        assert db.session.get(Item, item_id).sold_date is None
