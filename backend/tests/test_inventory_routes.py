# Overview: Pytest coverage for the inventory HTTP API.

from datetime import timedelta

import pytest

from stockbook.time_utils import shop_today


def _sub(tree, name):
    for category in tree["categories"]:
        for sub in category["sub_categories"]:
            if sub["name"] == name:
                return sub
    raise AssertionError(f"{name} not in tree")


class TestCatalogRoutes:

    def test_build_catalog(self, client, boss_headers):
        resp = client.post("/api/inventory/categories", json={"name": "Phones"}, headers=boss_headers)
        assert resp.status_code == 201
        category_id = resp.json["category"]["id"]

        resp = client.post(
            f"/api/inventory/categories/{category_id}/sub-categories",
            json={"name": "Tecno Spark", "buying_price": "80", "selling_price": "150"},
            headers=boss_headers,
        )
        assert resp.status_code == 201
        spark = _sub(resp.json, "Tecno Spark")
        assert spark["buying_price_cents"] == 8000
        assert spark["selling_price_cents"] == 15000
        assert spark["available_count"] == 0

    def test_blank_name_is_400(self, client, boss_headers):
        resp = client.post("/api/inventory/categories", json={"name": ""}, headers=boss_headers)
        assert resp.status_code == 400

    def test_rename_unknown_category_is_404(self, client, boss_headers):
        resp = client.patch("/api/inventory/categories/9999", json={"name": "X"}, headers=boss_headers)
        assert resp.status_code == 404

    def test_bad_price_is_400(self, client, boss_headers, stocked):
        resp = client.patch(
            f"/api/inventory/sub-categories/{stocked['spark'].id}",
            json={"name": "Spark", "buying_price": "-1", "selling_price": "150"},
            headers=boss_headers,
        )
        assert resp.status_code == 400


class TestStockRoutes:

    def test_add_stock_numbers_after_existing(self, client, boss_headers, stocked):
        resp = client.post(
            f"/api/inventory/sub-categories/{stocked['itel'].id}/stock",
            json={"quantity": 2},
            headers=boss_headers,
        )
        assert resp.status_code == 201
        assert resp.json["added"] == [3, 4]
        itel = _sub(resp.json, "Itel A70")
        assert [item["item_number"] for item in itel["items"]] == [1, 2, 3, 4]

    @pytest.mark.parametrize("quantity", [0, -1, "x", 2.5])
    def test_bad_quantity_is_400(self, client, boss_headers, stocked, quantity):
        resp = client.post(
            f"/api/inventory/sub-categories/{stocked['itel'].id}/stock",
            json={"quantity": quantity},
            headers=boss_headers,
        )
        assert resp.status_code == 400

    def test_non_object_body_is_400(self, client, boss_headers, stocked):
        resp = client.post(
            f"/api/inventory/sub-categories/{stocked['itel'].id}/stock",
            json=[3],
            headers=boss_headers,
        )
        assert resp.status_code == 400
        assert resp.json["error"] == "request body must be a JSON object"

    def test_delete_renumbers(self, client, boss_headers, stocked):
        tree = client.get("/api/inventory", headers=boss_headers).json
        spark = _sub(tree, "Tecno Spark")
        second = spark["items"][1]["id"]

        resp = client.delete(f"/api/inventory/items/{second}", headers=boss_headers)
        assert resp.status_code == 200
        spark = _sub(resp.json, "Tecno Spark")
        assert [item["item_number"] for item in spark["items"]] == [1, 2, 3, 4]
        assert second not in [item["id"] for item in spark["items"]]


class TestSaleRoutes:

    def test_sell_then_revert(self, app, client, boss_headers, stocked):
        tree = client.get("/api/inventory", headers=boss_headers).json
        item_id = _sub(tree, "Tecno Spark")["items"][0]["id"]
        today = shop_today(app.config["SHOP_TIMEZONE"])

        resp = client.post(f"/api/inventory/items/{item_id}/sell", json={}, headers=boss_headers)
        assert resp.status_code == 200
        assert resp.json["item"]["status"] == "sold"
        assert resp.json["item"]["sold_date"] == today.isoformat()
        assert _sub(resp.json, "Tecno Spark")["available_count"] == 4

        resp = client.post(f"/api/inventory/items/{item_id}/sell", json={}, headers=boss_headers)
        assert resp.status_code == 409

        resp = client.post(f"/api/inventory/items/{item_id}/revert", headers=boss_headers)
        assert resp.status_code == 200
        assert resp.json["item"]["sold_date"] is None
        assert _sub(resp.json, "Tecno Spark")["available_count"] == 5

    def test_sell_too_old_is_400(self, app, client, boss_headers, stocked):
        tree = client.get("/api/inventory", headers=boss_headers).json
        item_id = _sub(tree, "Tecno Spark")["items"][0]["id"]
        old = shop_today(app.config["SHOP_TIMEZONE"]) - timedelta(days=5)
        resp = client.post(
            f"/api/inventory/items/{item_id}/sell",
            json={"sold_date": old.isoformat()},
            headers=boss_headers,
        )
        assert resp.status_code == 400

    def test_search_param(self, client, boss_headers, stocked):
        resp = client.get("/api/inventory?q=spark", headers=boss_headers)
        subs = resp.json["categories"][0]["sub_categories"]
        assert [sub["name"] for sub in subs] == ["Tecno Spark"]
