"""Integration tests for the review endpoints."""


class TestReviewEndpoints:
    def test_submit_returns_message(self, user_client, product):
        response = user_client.post(
            "/api/reviews", json={"productId": str(product.id), "rating": 5, "comment": "Lovely"}
        )

        assert response.status_code == 201
        assert response.json() == {"message": "Review submitted and awaiting approval"}

    def test_submit_requires_login(self, client, product):
        response = client.post("/api/reviews", json={"productId": str(product.id), "rating": 5, "comment": "Lovely"})
        assert response.status_code == 401

    def test_rating_out_of_range(self, user_client, product):
        response = user_client.post("/api/reviews", json={"productId": str(product.id), "rating": 9, "comment": "Wow"})
        assert response.status_code == 400

    def test_unknown_product_is_404(self, user_client):
        response = user_client.post("/api/reviews", json={"productId": "no-such-product", "rating": 4, "comment": "?"})
        assert response.status_code == 404

    def test_moderation_flow(self, user_client, admin_client, client, user, product):
        user_client.post("/api/reviews", json={"productId": str(product.id), "rating": 4, "comment": "Good stitching"})

        [pending] = admin_client.get("/api/admin/reviews").json()
        assert pending["status"] == "pending"
        assert pending["user"] == {"id": str(user.id), "name": user.name, "email": user.email}
        assert pending["product"] == {"id": str(product.id), "name": product.name}
        assert client.get(f"/api/products/{product.id}/reviews").json() == []

        approved = admin_client.put(f"/api/admin/reviews/{pending['id']}/approve")
        assert approved.json()["status"] == "approved"

        [public] = client.get(f"/api/products/{product.id}/reviews").json()
        assert public["comment"] == "Good stitching"
        assert public["userName"] == user.name

        deleted = admin_client.delete(f"/api/admin/reviews/{pending['id']}")
        assert deleted.json() == {"message": "Review deleted successfully"}
        assert admin_client.get("/api/admin/reviews").json() == []

    def test_approve_missing_is_404(self, admin_client):
        assert admin_client.put("/api/admin/reviews/no-such-review/approve").status_code == 404

    def test_admin_routes_require_admin(self, user_client):
        assert user_client.get("/api/admin/reviews").status_code == 403
