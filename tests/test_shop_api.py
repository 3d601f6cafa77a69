"""API tests for shop products."""

NEW_PRODUCT = {
    "name": "Пазл \"Репка\"",
    "description": "Пазл из 60 деталей",
    "price": 59900,
    "category": "Игрушки",
}


def test_list_active_products(client):
    products = client.get("/api/shop-products").json()

    assert len(products) == 6
    assert all(p["isActive"] for p in products)
    assert products[0]["imageUrl"] == ""


def test_create_product(client):
    response = client.post("/api/shop-products", json=NEW_PRODUCT)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 7
    assert body["stock"] == 0
    assert body["isActive"] is True


def test_create_product_validation(client):
    response = client.post("/api/shop-products", json={"name": "Без цены"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid data"
    assert {tuple(e["loc"])[-1] for e in body["errors"]} >= {"description", "price", "category"}


def test_update_product(client):
    response = client.put("/api/shop-products/2", json={"stock": 12})

    assert response.status_code == 200
    assert response.json()["stock"] == 12
    assert response.json()["name"] == "Худи RIZY LAND с капюшоном"


def test_update_rejects_null_for_required_fields(client):
    before = client.get("/api/shop-products/2").json()

    for field in ("name", "price", "isActive"):
        response = client.put("/api/shop-products/2", json={field: None})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid data"

    assert client.get("/api/shop-products/2").json() == before


def test_delete_deactivates_product(client):
    response = client.delete("/api/shop-products/1")

    assert response.status_code == 200
    assert response.json() == {"message": "Shop product deleted successfully"}
    assert 1 not in [p["id"] for p in client.get("/api/shop-products").json()]
    assert client.get("/api/shop-products/1").json()["isActive"] is False


def test_missing_product(client):
    for response in (
        client.get("/api/shop-products/77"),
        client.put("/api/shop-products/77", json={"stock": 1}),
        client.delete("/api/shop-products/77"),
    ):
        assert response.status_code == 404
        assert response.json() == {"message": "Shop product not found"}
