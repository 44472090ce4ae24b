"""Shopping cart: lazy creation, stock checks against the catalogue, snapshots."""
from decimal import Decimal

from sweetshop.extensions import db
from sweetshop.model import Cart, CartItem

from conftest import make_sweet, payload


def _add(client, headers, sweet_id, quantity):
    return client.post("/api/cart/add", headers=headers, json={"sweet_id": sweet_id, "quantity": quantity})


class TestCart:
    def test_cart_created_on_first_read(self, client, user, user_headers):
        assert Cart.query.count() == 0
        resp = client.get("/api/cart", headers=user_headers)
        assert resp.status_code == 200
        cart = payload(resp)["cart"]
        assert cart["items"] == []
        assert cart["total"] == 0
        assert cart["user_id"] == user.id
        assert Cart.query.count() == 1

        client.get("/api/cart", headers=user_headers)
        assert Cart.query.count() == 1

    def test_add_item(self, client, user_headers, sweet):
        resp = _add(client, user_headers, sweet.id, 2)
        assert resp.status_code == 200
        cart = payload(resp)["cart"]
        assert len(cart["items"]) == 1
        item = cart["items"][0]
        assert item["quantity"] == 2
        assert item["price_at_added"] == 5.99
        assert item["sweet"]["name"] == "Test Sweet"
        assert cart["total"] == 11.98

    def test_add_same_sweet_merges(self, client, user_headers, sweet):
        _add(client, user_headers, sweet.id, 2)
        resp = _add(client, user_headers, sweet.id, 3)
        items = payload(resp)["cart"]["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 5

    def test_cumulative_quantity_checked(self, client, user_headers):
        s = make_sweet("Scarce", quantity=5)
        assert _add(client, user_headers, s.id, 4).status_code == 200
        resp = _add(client, user_headers, s.id, 2)
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Insufficient stock available"
        assert CartItem.query.one().quantity == 4

    def test_add_more_than_stock(self, client, user_headers, sweet):
        resp = _add(client, user_headers, sweet.id, 101)
        assert resp.status_code == 400

    def test_add_does_not_touch_stock(self, client, user_headers, sweet):
        _add(client, user_headers, sweet.id, 10)
        assert sweet.quantity == 100

    def test_add_validation(self, client, user_headers, sweet):
        for body in ({"sweet_id": sweet.id}, {"quantity": 1}, {"sweet_id": sweet.id, "quantity": 0},
                     {"sweet_id": sweet.id, "quantity": "\u00b2"}):
            resp = client.post("/api/cart/add", headers=user_headers, json=body)
            assert resp.status_code == 400
            assert resp.get_json()["message"] == "Sweet ID and valid quantity are required"

    def test_add_unknown_sweet(self, client, user_headers):
        resp = _add(client, user_headers, 999, 1)
        assert resp.status_code == 404
        assert resp.get_json()["message"] == "Sweet not found"

    def test_price_snapshot_survives_price_change(self, client, user_headers, admin_headers, sweet):
        _add(client, user_headers, sweet.id, 1)
        client.put(f"/api/sweets/{sweet.id}", headers=admin_headers, json={"price": 9.99})
        cart = payload(client.get("/api/cart", headers=user_headers))["cart"]
        assert cart["items"][0]["price_at_added"] == 5.99
        assert cart["total"] == 5.99

    def test_update_item(self, client, user_headers, sweet):
        item_id = payload(_add(client, user_headers, sweet.id, 1))["cart"]["items"][0]["id"]
        resp = client.put(f"/api/cart/item/{item_id}", headers=user_headers, json={"quantity": 4})
        assert resp.status_code == 200
        assert payload(resp)["cart"]["items"][0]["quantity"] == 4

    def test_update_item_checks_stock(self, client, user_headers, sweet):
        item_id = payload(_add(client, user_headers, sweet.id, 1))["cart"]["items"][0]["id"]
        resp = client.put(f"/api/cart/item/{item_id}", headers=user_headers, json={"quantity": 500})
        assert resp.status_code == 400
        assert CartItem.query.one().quantity == 1

    def test_update_item_validation(self, client, user_headers, sweet):
        item_id = payload(_add(client, user_headers, sweet.id, 1))["cart"]["items"][0]["id"]
        resp = client.put(f"/api/cart/item/{item_id}", headers=user_headers, json={"quantity": 0})
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Valid quantity is required"

    def test_update_unknown_item(self, client, user_headers, sweet):
        _add(client, user_headers, sweet.id, 1)
        resp = client.put("/api/cart/item/999", headers=user_headers, json={"quantity": 2})
        assert resp.status_code == 404
        assert resp.get_json()["message"] == "Item not found in cart"

    def test_cannot_touch_another_users_item(self, client, user_headers, other_headers, sweet):
        item_id = payload(_add(client, user_headers, sweet.id, 1))["cart"]["items"][0]["id"]
        client.get("/api/cart", headers=other_headers)
        resp = client.put(f"/api/cart/item/{item_id}", headers=other_headers, json={"quantity": 2})
        assert resp.status_code == 404

    def test_remove_item(self, client, user_headers, sweet):
        other = make_sweet("Second")
        _add(client, user_headers, other.id, 1)
        item_id = payload(_add(client, user_headers, sweet.id, 1))["cart"]["items"][-1]["id"]
        resp = client.delete(f"/api/cart/item/{item_id}", headers=user_headers)
        assert resp.status_code == 200
        items = payload(resp)["cart"]["items"]
        assert [i["sweet_id"] for i in items] == [other.id]

    def test_remove_unknown_item_is_noop(self, client, user_headers, sweet):
        _add(client, user_headers, sweet.id, 1)
        resp = client.delete("/api/cart/item/999", headers=user_headers)
        assert resp.status_code == 200
        assert len(payload(resp)["cart"]["items"]) == 1

    def test_remove_without_cart(self, client, user_headers):
        resp = client.delete("/api/cart/item/1", headers=user_headers)
        assert resp.status_code == 404
        assert resp.get_json()["message"] == "Cart not found"

    def test_clear(self, client, user_headers, sweet):
        _add(client, user_headers, sweet.id, 3)
        resp = client.delete("/api/cart/clear", headers=user_headers)
        assert resp.status_code == 200
        assert payload(resp)["cart"]["items"] == []
        assert CartItem.query.count() == 0

    def test_deleting_sweet_drops_cart_lines(self, client, user_headers, admin_headers, sweet):
        _add(client, user_headers, sweet.id, 1)
        client.delete(f"/api/sweets/{sweet.id}", headers=admin_headers)
        cart = payload(client.get("/api/cart", headers=user_headers))["cart"]
        assert cart["items"] == []

    def test_total_uses_snapshot_prices(self, app, user, sweet):
        cart = Cart(user_id=user.id)
        cart.items.append(CartItem(sweet_id=sweet.id, quantity=3, price_at_added=Decimal("1.10")))
        db.session.add(cart)
        db.session.commit()
        assert cart.total_dec() == Decimal("3.30")

    def test_requires_login(self, client):
        assert client.get("/api/cart").status_code == 401
