"""
Cart API Tests
==============

Run with: pytest tests/test_cart.py -v
"""

import mongomock
import pytest
from bson import ObjectId
from flask import Flask

from pruto import Pruto
from pruto.modules.cart import CartStore


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(mongo_client):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["MONGO_DBNAME"] = "pruto_test"
    Pruto(app, mongo_client=mongo_client)
    return app


@pytest.fixture
def client(app):
    client = app.test_client()
    response = client.post("/auth/login", json={"email": "ann@example.com"}, headers=AUTH)
    assert response.status_code == 201
    return client


@pytest.fixture
def products(mongo_client):
    return mongo_client["pruto_test"]["products"]


@pytest.fixture
def shoe(products):
    return str(products.insert_one({"name": "Shoe", "price": 10}).inserted_id)


AUTH = {"X-Firebase-UID": "user-1"}
RED = {"name": "Red", "hexCode": "#ff0000"}


def _add(client, product_id, quantity=1, **variant):
    body = {"productId": product_id, "quantity": quantity, **variant}
    return client.post("/cart/add", json=body, headers=AUTH)


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------

def test_cart_requires_uid(client):
    assert client.get("/cart").status_code == 401


def test_cart_unknown_user_returns_404(client):
    response = client.get("/cart", headers={"X-Firebase-UID": "ghost"})
    assert response.status_code == 404
    assert response.get_json() == {"message": "User not found."}


def test_empty_cart(client):
    response = client.get("/cart", headers=AUTH)
    assert response.status_code == 200
    assert response.get_json() == {"message": "Cart is empty or not found.", "items": []}


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------

def test_add_item_populates_product(client, shoe):
    response = _add(client, shoe, 2, selectedSize="42", selectedColor=RED)
    assert response.status_code == 200

    data = response.get_json()
    assert data["message"] == "Item added/updated in cart."
    item = data["cart"]["items"][0]
    assert item["product"]["_id"] == shoe
    assert item["product"]["name"] == "Shoe"
    assert item["quantity"] == 2
    assert item["priceAtTimeOfAddition"] == 10
    assert item["selectedColor"] == RED

    assert client.get("/cart", headers=AUTH).get_json()["items"] == data["cart"]["items"]


def test_same_variant_increments_and_refreshes_price(client, shoe, products):
    _add(client, shoe, 1, selectedSize="42")
    products.update_one({"_id": ObjectId(shoe)}, {"$set": {"price": 12}})

    items = _add(client, shoe, 2, selectedSize="42").get_json()["cart"]["items"]

    assert len(items) == 1
    assert items[0]["quantity"] == 3
    assert items[0]["priceAtTimeOfAddition"] == 12


def test_other_variant_is_a_new_line(client, shoe):
    _add(client, shoe, 1, selectedSize="42", selectedColor=RED)
    items = _add(client, shoe, 1, selectedSize="43", selectedColor=RED).get_json()["cart"]["items"]

    assert [i["selectedSize"] for i in items] == ["42", "43"]


@pytest.mark.parametrize("quantity", [0, -1, "2", True, None])
def test_add_rejects_bad_quantity(client, shoe, quantity):
    response = _add(client, shoe, quantity)
    assert response.status_code == 400
    assert response.get_json() == {"message": "Product ID and quantity (min 1) are required."}


def test_add_requires_product_id(client):
    response = client.post("/cart/add", json={"quantity": 1}, headers=AUTH)
    assert response.status_code == 400


def test_add_unknown_product_returns_404(client):
    response = _add(client, str(ObjectId()))
    assert response.status_code == 404
    assert response.get_json() == {"message": "Product not found."}


def test_add_malformed_product_id_returns_400(client):
    assert _add(client, "not-an-id").status_code == 400


# ---------------------------------------------------------------------------
# update / remove
# ---------------------------------------------------------------------------

def test_update_sets_quantity(client, shoe):
    _add(client, shoe, 1, selectedSize="42")
    response = client.put(f"/cart/update/{shoe}", json={"quantity": 5, "selectedSize": "42"}, headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["message"] == "Cart updated successfully."
    assert response.get_json()["cart"]["items"][0]["quantity"] == 5


def test_update_to_zero_removes_line(client, shoe):
    _add(client, shoe, 1)
    response = client.put(f"/cart/update/{shoe}", json={"quantity": 0}, headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["cart"]["items"] == []


def test_update_rejects_negative_quantity(client, shoe):
    _add(client, shoe, 1)
    response = client.put(f"/cart/update/{shoe}", json={"quantity": -1}, headers=AUTH)

    assert response.status_code == 400
    assert response.get_json() == {"message": "Quantity must be a non-negative number."}


def test_update_without_cart_returns_404(client, shoe):
    response = client.put(f"/cart/update/{shoe}", json={"quantity": 1}, headers=AUTH)
    assert response.status_code == 404
    assert response.get_json() == {"message": "Cart not found."}


def test_update_variant_not_in_cart_returns_404(client, shoe):
    _add(client, shoe, 1, selectedSize="42")
    response = client.put(f"/cart/update/{shoe}", json={"quantity": 2, "selectedSize": "44"}, headers=AUTH)

    assert response.status_code == 404
    assert response.get_json() == {"message": "Item not found in cart."}


def test_remove_item(client, shoe):
    _add(client, shoe, 1, selectedColor=RED)
    response = client.delete(f"/cart/remove/{shoe}", json={"selectedColor": RED}, headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["message"] == "Item removed from cart."
    assert response.get_json()["cart"]["items"] == []


def test_remove_missing_item_returns_404(client, shoe):
    _add(client, shoe, 1)
    response = client.delete(f"/cart/remove/{ObjectId()}", headers=AUTH)

    assert response.status_code == 404
    assert response.get_json() == {"message": "Item not found in cart."}


def test_deleted_product_shows_as_null(client, shoe, products):
    _add(client, shoe, 1)
    products.delete_one({"_id": ObjectId(shoe)})

    items = client.get("/cart", headers=AUTH).get_json()["items"]
    assert items[0]["product"] is None


# ---------------------------------------------------------------------------
# CartStore directly
# ---------------------------------------------------------------------------

def test_store_keeps_one_cart_per_user():
    db = mongomock.MongoClient()["db"]
    product_id = db["products"].insert_one({"price": 3}).inserted_id
    store = CartStore(db["carts"], db["products"])
    user_id = ObjectId()

    store.add_item(user_id, str(product_id), 1)
    store.add_item(user_id, str(product_id), 1, size="M")
    store.clear(user_id)

    assert db["carts"].count_documents({}) == 1
    assert store.get(user_id)["items"] == []
