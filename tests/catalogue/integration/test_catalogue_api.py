"""Integration tests for the catalogue endpoints."""

from fastapi.testclient import TestClient

PRODUCT = {
    "name": "Relaxed Cargo Pant",
    "sku": "CARGO-OLV-32",
    "price": "899.00",
    "stock": 40,
    "images": ["https://cdn.example.com/cargo-olive.jpg"],
    "variants": [{"name": "size", "value": "32"}],
}

MISSING_ID = "00000000-0000-0000-0000-000000000000"


class TestCategoryEndpoints:
    def test_public_reads(self, client, category):
        assert client.get("/api/categories").json()[0]["slug"] == "cargo"
        assert client.get(f"/api/categories/{category.id}").json()["name"] == "Cargo"
        assert client.get("/api/categories/slug/cargo").json()["id"] == str(category.id)

    def test_missing_category_404(self, client):
        response = client.get(f"/api/categories/{MISSING_ID}")
        assert response.status_code == 404
        assert response.json()["message"]

    def test_unknown_slug_404(self, client):
        response = client.get("/api/categories/slug/nope")
        assert response.status_code == 404
        assert response.json()["message"] == "Category not found"

    def test_writes_require_admin(self, app, user_client):
        payload = {"name": "Shirts", "slug": "shirts"}
        assert TestClient(app).post("/api/categories", json=payload).status_code == 401
        assert user_client.post("/api/categories", json=payload).status_code == 403

    def test_admin_crud(self, admin_client):
        created = admin_client.post("/api/categories", json={"name": "Shirts", "slug": "shirts"})
        assert created.status_code == 201
        category_id = created.json()["id"]

        updated = admin_client.put(f"/api/categories/{category_id}", json={"description": "Formal"})
        assert updated.json()["description"] == "Formal"

        deleted = admin_client.delete(f"/api/categories/{category_id}")
        assert deleted.json() == {"message": "Category deleted successfully"}

    def test_duplicate_slug_conflicts(self, admin_client, category):
        response = admin_client.post("/api/categories", json={"name": "Other", "slug": "cargo"})
        assert response.status_code == 409


class TestProductEndpoints:
    def test_admin_creates_product(self, admin_client, category):
        response = admin_client.post("/api/products", json={**PRODUCT, "categoryId": str(category.id)})

        assert response.status_code == 201
        data = response.json()
        assert data["sku"] == "CARGO-OLV-32"
        assert data["price"] == "899.00"
        assert data["categoryId"] == str(category.id)
        assert data["variants"] == [{"name": "size", "value": "32"}]

    def test_negative_price_rejected(self, admin_client, category):
        response = admin_client.post("/api/products", json={**PRODUCT, "price": "-5", "categoryId": str(category.id)})
        assert response.status_code == 400

    def test_unknown_category_rejected(self, admin_client):
        response = admin_client.post("/api/products", json={**PRODUCT, "categoryId": MISSING_ID})
        assert response.status_code == 400
        assert response.json()["errors"] == {"category_id": ["Category does not exist"]}

    def test_product_detail_includes_category(self, client, product, category):
        data = client.get(f"/api/products/{product.id}").json()
        assert data["category"] == {"id": str(category.id), "name": "Cargo", "slug": "cargo", "description": None}

    def test_listings(self, client, product, category):
        product_id = str(product.id)
        assert [p["id"] for p in client.get("/api/products").json()] == [product_id]
        assert [p["id"] for p in client.get(f"/api/products/category/{category.id}").json()] == [product_id]
        assert [p["id"] for p in client.get("/api/products/category-slug/cargo").json()] == [product_id]
        assert client.get("/api/products/category-slug/nope").json() == []

    def test_update_and_delete(self, admin_client, product):
        response = admin_client.put(f"/api/products/{product.id}", json={"price": "450.50"})
        assert response.json()["price"] == "450.50"

        assert admin_client.delete(f"/api/products/{product.id}").status_code == 200
        assert admin_client.get(f"/api/products/{product.id}").status_code == 404


class TestBannerEndpoints:
    def test_type_filter(self, admin_client, client):
        admin_client.post("/api/banners", json={"title": "Hero", "image": "h.jpg", "type": "hero"})
        admin_client.post("/api/banners", json={"title": "Promo", "image": "p.jpg", "type": "promotion"})

        heroes = client.get("/api/banners", params={"type": "hero"}).json()
        assert [b["title"] for b in heroes] == ["Hero"]
        assert len(client.get("/api/banners").json()) == 2

    def test_missing_banner_404(self, client):
        assert client.get(f"/api/banners/{MISSING_ID}").status_code == 404
