"""Tests for customer product reviews and their moderation."""

import pytest


def review(**overrides):
    data = {
        "customer_name": "Priya Sharma",
        "city": "Mysuru",
        "rating": 5,
        "comment": "Charges my laptop quickly and stays cool.",
    }
    data.update(overrides)
    return data


@pytest.fixture
def charger(client, admin_headers):
    response = client.post(
        "/admin/products",
        json={"name": "Universal USB-C Charger 65W", "category": "Chargers", "price": 799},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


class TestSubmitReview:
    def test_created(self, client, charger):
        response = client.post(f"/products/{charger['id']}/reviews", json=review())
        assert response.status_code == 201
        data = response.json()
        assert data["product_id"] == charger["id"]
        assert data["customer_name"] == "Priya Sharma"
        assert data["rating"] == 5
        assert data["created_at"] == "2026-10-17T09:30:00"

    @pytest.mark.parametrize(
        "overrides, field, message",
        [
            ({"customer_name": "P1"}, "customer_name", "Name must be 3-100 characters, letters only"),
            ({"city": "B4"}, "city", "City must be 3-100 characters, letters only"),
            ({"comment": "Too short"}, "comment", "Comment must be at least 10 characters"),
        ],
    )
    def test_field_rules(self, client, charger, overrides, field, message):
        response = client.post(f"/products/{charger['id']}/reviews", json=review(**overrides))
        assert response.status_code == 422
        assert response.json()["fields"][field] == message

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, client, charger, rating):
        response = client.post(f"/products/{charger['id']}/reviews", json=review(rating=rating))
        assert response.status_code == 422
        assert "rating" in response.json()["fields"]

    def test_unknown_product(self, client):
        response = client.post("/products/999/reviews", json=review())
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_inactive_product(self, client, admin_headers, charger):
        client.patch(f"/admin/products/{charger['id']}", json={"is_active": False}, headers=admin_headers)
        assert client.post(f"/products/{charger['id']}/reviews", json=review()).status_code == 404


class TestListReviews:
    def test_newest_first(self, client, clock, charger):
        client.post(f"/products/{charger['id']}/reviews", json=review(customer_name="First Buyer"))
        clock.advance(60)
        client.post(f"/products/{charger['id']}/reviews", json=review(customer_name="Second Buyer"))

        names = [r["customer_name"] for r in client.get(f"/products/{charger['id']}/reviews").json()]
        assert names == ["Second Buyer", "First Buyer"]

    def test_scoped_to_product(self, client, admin_headers, charger):
        other = client.post(
            "/admin/products",
            json={"name": "Braided Cable", "category": "Cables", "price": 399},
            headers=admin_headers,
        ).json()
        client.post(f"/products/{other['id']}/reviews", json=review())

        assert client.get(f"/products/{charger['id']}/reviews").json() == []

    def test_hidden_reviews_are_not_listed(self, client, admin_headers, charger):
        kept = client.post(f"/products/{charger['id']}/reviews", json=review(customer_name="Kept Review")).json()
        hidden = client.post(f"/products/{charger['id']}/reviews", json=review(customer_name="Spam Review")).json()

        response = client.patch(f"/admin/reviews/{hidden['id']}", json={"is_approved": False}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["is_approved"] is False

        listed = client.get(f"/products/{charger['id']}/reviews").json()
        assert [r["id"] for r in listed] == [kept["id"]]
        assert "is_approved" not in listed[0]

    def test_unknown_product(self, client):
        assert client.get("/products/999/reviews").status_code == 404


class TestModeration:
    def test_back_office_sees_hidden_reviews(self, client, admin_headers, charger):
        created = client.post(f"/products/{charger['id']}/reviews", json=review()).json()
        client.patch(f"/admin/reviews/{created['id']}", json={"is_approved": False}, headers=admin_headers)

        reviews = client.get("/admin/reviews", headers=admin_headers).json()
        assert [(r["id"], r["is_approved"]) for r in reviews] == [(created["id"], False)]

    def test_reapproving_restores_listing(self, client, admin_headers, charger):
        created = client.post(f"/products/{charger['id']}/reviews", json=review()).json()
        client.patch(f"/admin/reviews/{created['id']}", json={"is_approved": False}, headers=admin_headers)
        client.patch(f"/admin/reviews/{created['id']}", json={"is_approved": True}, headers=admin_headers)

        assert len(client.get(f"/products/{charger['id']}/reviews").json()) == 1

    def test_unknown_review(self, client, admin_headers):
        response = client.patch("/admin/reviews/999", json={"is_approved": False}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Review not found"

    def test_requires_admin(self, client):
        assert client.get("/admin/reviews").status_code == 401
