"""Test the REST endpoints and their status codes."""

import re
from datetime import date

import pytest

ALBUM = {
    "name": "The Dark Side of the Moon",
    "price": 20.0,
    "stock": 10,
    "artist": "Pink Floyd",
    "year": 1973,
    "format": "CD",
    "genre": "ROCK",
    "duration": "43:00",
}

USER = {
    "name": "Juan Perez",
    "email": "juanperez@gmail.com",
    "password": "juanperez",
    "phone": "5845464864",
    "address": "Callle 3ra #15",
}


@pytest.fixture
def user_id(client):
    response = client.post("/users/new", json=USER)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def album_id(client):
    response = client.post("/albums/new", json=ALBUM)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def thriller_id(client):
    response = client.post("/albums/new", json={**ALBUM, "name": "Thriller", "price": 25.0,
                                                 "artist": "Michael Jackson", "year": 1982})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def headphone_id(client):
    response = client.post("/headphones/new", json={
        "name": "WH-1000XM4", "price": 349.99, "stock": 200, "brand": "Sony",
        "wireless": True, "bluetooth": True, "headphone_type": "OVER_EAR", "anc": "ACTIVE",
    })
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def order(client, user_id, album_id, thriller_id):
    response = client.post("/orders/new", json={
        "user_id": user_id,
        "items": [
            {"product_id": album_id, "quantity": 2},
            {"product_id": thriller_id, "quantity": 1},
        ],
    })
    assert response.status_code == 201
    return response.json()


class TestRoot:
    """Test operational endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "message" in response.json()

    def test_seed_loads_sample_data_once(self, client):
        first = client.post("/seed").json()
        assert first["created"]["users"] == 5
        assert first["created"]["products"] == 35
        assert first["created"]["orders"] >= 5

        second = client.post("/seed").json()
        assert second["created"] == {"users": 0, "products": 0, "orders": 0}
        assert len(client.get("/products").json()) == 35


class TestAlbumEndpoints:
    """Test /albums."""

    def test_create_returns_201_and_category(self, client):
        response = client.post("/albums/new", json=ALBUM)
        assert response.status_code == 201
        data = response.json()
        assert data["category"] == "ALBUM"
        assert data["artist"] == "Pink Floyd"

    def test_invalid_year_returns_400(self, client):
        response = client.post("/albums/new", json={**ALBUM, "year": 1850})
        assert response.status_code == 400
        assert "year" in response.json()["detail"]

    def test_negative_price_returns_422(self, client):
        response = client.post("/albums/new", json={**ALBUM, "price": -1})
        assert response.status_code == 422

    def test_price_above_limit_returns_422(self, client):
        response = client.post("/albums/new", json={**ALBUM, "price": 1e27})
        assert response.status_code == 422

    def test_category_in_body_is_ignored(self, client):
        response = client.post("/albums/new", json={**ALBUM, "category": "PLAYER"})
        assert response.json()["category"] == "ALBUM"

    def test_get_unknown_returns_404(self, client):
        assert client.get("/albums/999").status_code == 404

    def test_fixed_paths_are_not_read_as_ids(self, client, album_id):
        response = client.get("/albums/in-stock")
        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [album_id]

    def test_partial_update(self, client, album_id):
        response = client.put(f"/albums/update/{album_id}", json={"name": "DSOTM"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "DSOTM"
        assert data["price"] == 20.0
        assert data["year"] == 1973

    def test_filters(self, client, album_id, thriller_id):
        assert [a["id"] for a in client.get("/albums/artist/Pink Floyd").json()] == [album_id]
        assert len(client.get("/albums/genre/ROCK").json()) == 2
        assert client.get("/albums/count/artist/Pink Floyd").json() == {"count": 1}
        years = client.get("/albums/year-range", params={"startYear": 1980, "endYear": 1990}).json()
        assert [a["id"] for a in years] == [thriller_id]
        prices = client.get("/albums/price-range", params={"minPrice": 0, "maxPrice": 21}).json()
        assert [a["id"] for a in prices] == [album_id]

    def test_unknown_genre_returns_422(self, client):
        assert client.get("/albums/genre/POLKA").status_code == 422

    def test_duration_range(self, client):
        ids = []
        for name, duration in (("Short", "9:59"), ("Medium", "10:00"), ("Long", "45:00")):
            ids.append(client.post("/albums/new", json={**ALBUM, "name": name, "duration": duration}).json()["id"])
        response = client.get("/albums/duration-range", params={"minDuration": "9:00", "maxDuration": "10:30"})
        assert [a["id"] for a in response.json()] == ids[:2]

    def test_delete_unreferenced_returns_204(self, client, album_id):
        assert client.delete(f"/albums/delete/{album_id}").status_code == 204
        assert client.get(f"/albums/{album_id}").status_code == 404

    def test_delete_ordered_album_returns_409(self, client, order, album_id):
        response = client.delete(f"/albums/delete/{album_id}")
        assert response.status_code == 409
        assert "order" in response.json()["detail"]
        assert client.get(f"/albums/{album_id}").status_code == 200


class TestVinylEndpoints:
    """Test /vinyls."""

    def test_combined_rpm_returns_400(self, client):
        response = client.post("/vinyls/new", json={**ALBUM, "rpm": "RPM_33_45"})
        assert response.status_code == 400

    def test_create_and_filter_by_rpm(self, client):
        created = client.post("/vinyls/new", json={**ALBUM, "rpm": "RPM_45", "size": "S_7"})
        assert created.status_code == 201
        assert created.json()["category"] == "A_VINYL"
        assert len(client.get("/vinyls/rpm/RPM_45").json()) == 1
        assert client.get("/vinyls/size/S_12").json() == []


class TestHeadphoneEndpoints:
    """Test /headphones."""

    def test_zero_and_false_are_written(self, client, headphone_id):
        response = client.put(f"/headphones/update/{headphone_id}", json={"price": 0, "wireless": False})
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 0
        assert data["wireless"] is False
        assert data["bluetooth"] is True

    def test_filters(self, client, headphone_id):
        assert [h["id"] for h in client.get("/headphones/anc/ACTIVE").json()] == [headphone_id]
        assert client.get("/headphones/wireless/false").json() == []
        assert client.get("/headphones/warranty", params={"min": 1}).json() == []

    def test_delete_headphone_in_wishlist_returns_409(self, client, user_id, headphone_id):
        assert client.post(f"/wishlists/{user_id}/product/{headphone_id}").status_code == 201
        response = client.delete(f"/headphones/delete/{headphone_id}")
        assert response.status_code == 409
        assert "wishlist" in response.json()["detail"]


class TestProductEndpoints:
    """Test /products across kinds."""

    def test_detail_uses_concrete_kind(self, client, album_id, headphone_id):
        assert client.get(f"/products/{album_id}").json()["artist"] == "Pink Floyd"
        assert client.get(f"/products/{headphone_id}").json()["anc"] == "ACTIVE"

    def test_category_and_count(self, client, album_id, headphone_id):
        assert [p["id"] for p in client.get("/products/category/ALBUM").json()] == [album_id]
        assert client.get("/products/count/category/AE_HEADPHONES").json() == {"count": 1}

    def test_search(self, client, album_id, headphone_id):
        response = client.get("/products/search", params={"name": "moon"})
        assert [p["id"] for p in response.json()] == [album_id]

    def test_delete(self, client, album_id):
        assert client.delete(f"/products/{album_id}").status_code == 204
        assert client.delete(f"/products/{album_id}").status_code == 404


class TestUserEndpoints:
    """Test /users."""

    def test_password_is_not_returned(self, client, user_id):
        data = client.get(f"/users/{user_id}").json()
        assert data["email"] == USER["email"]
        assert "password" not in data

    def test_duplicate_email_returns_409(self, client, user_id):
        assert client.post("/users/new", json=USER).status_code == 409

    def test_invalid_email_returns_422(self, client):
        assert client.post("/users/new", json={**USER, "email": "not-an-email"}).status_code == 422

    def test_list_and_lookup_by_email(self, client, user_id):
        assert [u["id"] for u in client.get("/users/all").json()] == [user_id]
        assert client.get(f"/users/email/{USER['email']}").json()["id"] == user_id

    def test_wrong_password_returns_401(self, client, user_id):
        response = client.patch(f"/users/{user_id}/password",
                                json={"old_password": "wrong", "new_password": "nuevaclave"})
        assert response.status_code == 401

    def test_change_then_verify_password(self, client, user_id):
        response = client.patch(f"/users/{user_id}/password",
                                json={"old_password": "juanperez", "new_password": "nuevaclave"})
        assert response.status_code == 200
        assert client.post(f"/users/{user_id}/verify-password", json={"password": "nuevaclave"}).status_code == 200
        assert client.post(f"/users/{user_id}/verify-password", json={"password": "juanperez"}).status_code == 401

    def test_update_address(self, client, user_id):
        response = client.patch(f"/users/{user_id}/address", json={"address": "Avenida 1 #2"})
        assert response.json()["address"] == "Avenida 1 #2"

    def test_delete(self, client, user_id):
        assert client.delete(f"/users/delete/{user_id}").status_code == 204
        assert client.get(f"/users/{user_id}").status_code == 404


class TestOrderEndpoints:
    """Test /orders."""

    def test_create_order(self, client, order, user_id):
        today = date.today().strftime("%d%m%y")
        assert order["total_amount"] == 65.0
        assert order["tracking_number"] == f"RCD-001-JUA-{today}-001"
        assert order["status"] == "PENDING"
        assert order["user"]["id"] == user_id
        assert [item["subtotal"] for item in order["items"]] == [40.0, 25.0]

    def test_second_order_gets_next_sequence(self, client, order, user_id, album_id):
        response = client.post("/orders/new", json={"user_id": user_id, "items": [{"product_id": album_id}]})
        assert re.match(r"^RCD-001-JUA-\d{6}-002$", response.json()["tracking_number"])

    def test_zero_quantity_returns_400(self, client, user_id, album_id):
        response = client.post("/orders/new", json={"user_id": user_id,
                                                    "items": [{"product_id": album_id, "quantity": 0}]})
        assert response.status_code == 400

    def test_huge_quantity_returns_400(self, client, user_id, album_id):
        response = client.post("/orders/new", json={"user_id": user_id,
                                                    "items": [{"product_id": album_id, "quantity": 2 ** 70}]})
        assert response.status_code == 400
        assert client.get(f"/orders/user/{user_id}").json() == []

    def test_empty_items_returns_400(self, client, user_id):
        assert client.post("/orders/new", json={"user_id": user_id, "items": []}).status_code == 400

    def test_unknown_user_or_product_returns_404(self, client, user_id, album_id):
        assert client.post("/orders/new", json={"user_id": 99, "items": [{"product_id": album_id}]}).status_code == 404
        assert client.post("/orders/new", json={"user_id": user_id, "items": [{"product_id": 99}]}).status_code == 404

    def test_add_products(self, client, order, thriller_id):
        response = client.post(f"/orders/{order['id']}/products", json=[{"product_id": thriller_id, "quantity": 2}])
        assert response.status_code == 200
        assert response.json()["total_amount"] == 115.0

    def test_status_transitions(self, client, order):
        paid = client.patch(f"/orders/{order['id']}/status", json={"status": "PAID"})
        assert paid.status_code == 200
        assert paid.json()["status"] == "PAID"
        back = client.patch(f"/orders/{order['id']}/status", json={"status": "PENDING"})
        assert back.status_code == 400

    def test_put_replaces_items(self, client, order, thriller_id):
        response = client.put(f"/orders/{order['id']}", json={"items": [{"product_id": thriller_id, "quantity": 1}]})
        assert response.status_code == 200
        assert response.json()["total_amount"] == 25.0
        assert response.json()["tracking_number"] == order["tracking_number"]

    def test_user_and_latest(self, client, order, user_id):
        assert [o["id"] for o in client.get(f"/orders/user/{user_id}").json()] == [order["id"]]
        assert client.get(f"/orders/latest/{user_id}").json()["id"] == order["id"]

    def test_latest_without_orders_returns_404(self, client, user_id):
        assert client.get(f"/orders/latest/{user_id}").status_code == 404

    def test_delete(self, client, order):
        assert client.delete(f"/orders/{order['id']}").status_code == 204
        assert client.get(f"/orders/{order['id']}").status_code == 404


class TestWishlistEndpoints:
    """Test /wishlists."""

    def test_add_returns_201(self, client, user_id, album_id):
        response = client.post(f"/wishlists/{user_id}/product/{album_id}")
        assert response.status_code == 201
        assert [p["id"] for p in response.json()["products"]] == [album_id]

    def test_duplicate_returns_409(self, client, user_id, album_id):
        client.post(f"/wishlists/{user_id}/product/{album_id}")
        assert client.post(f"/wishlists/{user_id}/product/{album_id}").status_code == 409

    def test_remove_returns_204(self, client, user_id, album_id):
        client.post(f"/wishlists/{user_id}/product/{album_id}")
        assert client.delete(f"/wishlists/{user_id}/product/{album_id}").status_code == 204
        assert client.get(f"/wishlists/{user_id}").json()["products"] == []

    def test_unknown_user_returns_404(self, client):
        assert client.get("/wishlists/99").status_code == 404
