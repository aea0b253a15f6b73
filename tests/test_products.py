# tests/test_products.py
import pytest

NEW_PRODUCT = {
    "name": "Desk Lamp",
    "description": "LED lamp with dimmer",
    "price": 45.5,
    "category": "home",
    "inStock": True,
}


def test_welcome_is_public(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text.startswith("Welcome to the Product API!")


def test_list_defaults(authed):
    r = authed.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 10
    assert [p["id"] for p in body["products"]] == ["1", "2", "3"]


def test_list_category_with_pagination(authed):
    r = authed.get("/api/products", params={"category": "electronics", "page": 1, "limit": 1})
    body = r.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["limit"] == 1
    assert len(body["products"]) == 1
    assert body["products"][0]["name"] == "Laptop"


def test_list_second_page(authed):
    body = authed.get("/api/products", params={"page": 2, "limit": 2}).json()
    assert body["total"] == 3
    assert [p["name"] for p in body["products"]] == ["Coffee Maker"]


def test_list_page_past_the_end_is_empty(authed):
    r = authed.get("/api/products", params={"page": 9, "limit": 5})
    assert r.status_code == 200
    assert r.json()["total"] == 3
    assert r.json()["products"] == []


def test_search_is_case_insensitive_substring(authed):
    body = authed.get("/api/products", params={"search": "PHONE"}).json()
    assert body["total"] == 1
    assert body["products"][0]["name"] == "Smartphone"


def test_category_filter_is_exact(authed):
    assert authed.get("/api/products", params={"category": "Electronics"}).json()["total"] == 0
    assert authed.get("/api/products", params={"category": "kitchen"}).json()["total"] == 1


def test_category_and_search_combine(authed):
    body = authed.get("/api/products", params={"category": "electronics", "search": "lap"}).json()
    assert [p["id"] for p in body["products"]] == ["1"]


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": -1}, {"page": "two"}, {"limit": "1.5"}])
def test_bad_pagination_is_rejected(authed, params):
    r = authed.get("/api/products", params=params)
    assert r.status_code == 400
    assert r.json() == {"error": "page and limit must be positive integers"}


def test_get_one(authed):
    r = authed.get("/api/products/3")
    assert r.status_code == 200
    assert r.json() == {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    }


@pytest.mark.parametrize("method", ["get", "delete"])
def test_unknown_id_is_404(authed, method):
    r = getattr(authed, method)("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_update_unknown_id_is_404(authed):
    r = authed.put("/api/products/nope", json=NEW_PRODUCT)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_create_then_fetch(authed, app):
    r = authed.post("/api/products", json=NEW_PRODUCT)
    assert r.status_code == 201
    created = r.json()
    assert created["id"]
    assert created["id"] not in {"1", "2", "3"}
    assert {k: v for k, v in created.items() if k != "id"} == NEW_PRODUCT

    fetched = authed.get(f"/api/products/{created['id']}").json()
    assert fetched == created
    assert len(app.state.store) == 4


def test_create_drops_unknown_fields(authed):
    created = authed.post("/api/products", json={**NEW_PRODUCT, "id": "1", "color": "red"}).json()
    assert created["id"] != "1"
    assert "color" not in created


def test_create_accepts_out_of_stock(authed):
    r = authed.post("/api/products", json={**NEW_PRODUCT, "inStock": False})
    assert r.status_code == 201
    assert r.json()["inStock"] is False


@pytest.mark.parametrize("price", [0, 0.0])
def test_create_rejects_zero_price(authed, app, price):
    r = authed.post("/api/products", json={**NEW_PRODUCT, "price": price})
    assert r.status_code == 400
    assert r.json() == {"error": "All fields (name, description, price, category, inStock) are required"}
    assert len(app.state.store) == 3


def test_update_keeps_path_id(authed):
    body = {**NEW_PRODUCT, "id": "999"}
    r = authed.put("/api/products/2", json=body)
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == "2"
    assert updated["name"] == "Desk Lamp"
    assert authed.get("/api/products/2").json() == updated
    assert authed.get("/api/products/999").status_code == 404


def test_update_keeps_store_order(authed):
    authed.put("/api/products/1", json=NEW_PRODUCT)
    ids = [p["id"] for p in authed.get("/api/products").json()["products"]]
    assert ids == ["1", "2", "3"]


def test_delete_returns_prior_record(authed, app):
    before = authed.get("/api/products/1").json()
    r = authed.delete("/api/products/1")
    assert r.status_code == 200
    assert r.json() == before
    assert authed.get("/api/products/1").status_code == 404
    assert len(app.state.store) == 2


def test_ids_are_not_reused(authed):
    first = authed.post("/api/products", json=NEW_PRODUCT).json()["id"]
    authed.delete(f"/api/products/{first}")
    second = authed.post("/api/products", json=NEW_PRODUCT).json()["id"]
    assert first != second


def test_stats_on_seed_data(authed):
    r = authed.get("/api/products/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalProducts"] == 3
    assert stats["categories"] == {"electronics": 2, "kitchen": 1}
    assert stats["inStock"] == 2
    assert stats["outOfStock"] == 1
    assert stats["averagePrice"] == pytest.approx(683.333, rel=1e-4)


def test_stats_follow_changes(authed):
    authed.post("/api/products", json=NEW_PRODUCT)
    authed.delete("/api/products/3")
    stats = authed.get("/api/products/stats").json()
    assert stats["totalProducts"] == 3
    assert stats["categories"] == {"electronics": 2, "home": 1}
    assert stats["outOfStock"] == 0


def test_stats_on_empty_store(authed):
    for pid in ("1", "2", "3"):
        authed.delete(f"/api/products/{pid}")
    stats = authed.get("/api/products/stats").json()
    assert stats == {
        "totalProducts": 0,
        "categories": {},
        "inStock": 0,
        "outOfStock": 0,
        "averagePrice": None,
    }
