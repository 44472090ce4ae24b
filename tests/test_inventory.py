"""Purchase / restock stock movements and the transaction ledger."""
import pytest

from sweetshop.model import Transaction
from sweetshop.model.transaction import PURCHASE, RESTOCK

from conftest import make_sweet, payload


def _purchase(client, headers, sweet_id, quantity):
    return client.post(f"/api/inventory/sweets/{sweet_id}/purchase", headers=headers, json={"quantity": quantity})


def _restock(client, headers, sweet_id, quantity):
    return client.post(f"/api/inventory/sweets/{sweet_id}/restock", headers=headers, json={"quantity": quantity})


class TestPurchase:
    def test_purchase_decrements_and_records(self, client, user, user_headers, sweet):
        resp = _purchase(client, user_headers, sweet.id, 5)
        assert resp.status_code == 200
        assert payload(resp)["sweet"]["quantity"] == 95
        assert sweet.quantity == 95

        rows = Transaction.query.all()
        assert len(rows) == 1
        assert rows[0].transaction_type == PURCHASE
        assert rows[0].quantity == 5
        assert rows[0].user_id == user.id

    def test_purchase_entire_stock(self, client, user_headers):
        s = make_sweet("Last Box", quantity=3)
        resp = _purchase(client, user_headers, s.id, 3)
        assert resp.status_code == 200
        assert payload(resp)["sweet"]["quantity"] == 0

    def test_insufficient_stock_leaves_state(self, client, user_headers, sweet):
        resp = _purchase(client, user_headers, sweet.id, 101)
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Insufficient quantity in stock"
        assert sweet.quantity == 100
        assert Transaction.query.count() == 0

    @pytest.mark.parametrize("quantity", [0, -2, "five", None, 2.5, "\u00b2"])
    def test_invalid_quantity(self, client, user_headers, sweet, quantity):
        resp = _purchase(client, user_headers, sweet.id, quantity)
        assert resp.status_code == 400
        assert sweet.quantity == 100

    def test_unknown_sweet(self, client, user_headers):
        assert _purchase(client, user_headers, 999, 1).status_code == 404

    def test_requires_login(self, client, sweet):
        resp = client.post(f"/api/inventory/sweets/{sweet.id}/purchase", json={"quantity": 1})
        assert resp.status_code == 401


class TestRestock:
    def test_admin_restocks(self, client, admin, admin_headers, sweet):
        resp = _restock(client, admin_headers, sweet.id, 50)
        assert resp.status_code == 200
        assert payload(resp)["sweet"]["quantity"] == 150

        row = Transaction.query.one()
        assert row.transaction_type == RESTOCK
        assert row.user_id == admin.id

    def test_non_admin_forbidden(self, client, user_headers, sweet):
        resp = _restock(client, user_headers, sweet.id, 50)
        assert resp.status_code == 403
        assert resp.get_json()["message"] == "Admin access required"
        assert sweet.quantity == 100

    def test_restock_invalid_quantity(self, client, admin_headers, sweet):
        assert _restock(client, admin_headers, sweet.id, 0).status_code == 400

    def test_restock_unknown_sweet(self, client, admin_headers):
        assert _restock(client, admin_headers, 999, 5).status_code == 404

    def test_purchase_then_restock(self, client, user_headers, admin_headers, sweet):
        _purchase(client, user_headers, sweet.id, 10)
        _restock(client, admin_headers, sweet.id, 4)
        assert sweet.quantity == 94
        assert Transaction.query.count() == 2


class TestTransactionList:
    @pytest.fixture()
    def history(self, client, user_headers, admin_headers, sweet):
        other = make_sweet("Other Sweet")
        _purchase(client, user_headers, sweet.id, 2)
        _purchase(client, user_headers, other.id, 1)
        _restock(client, admin_headers, sweet.id, 7)
        return sweet, other

    def test_lists_newest_first(self, client, admin_headers, history):
        resp = client.get("/api/inventory/transactions", headers=admin_headers)
        assert resp.status_code == 200
        rows = payload(resp)["transactions"]
        assert [r["transaction_type"] for r in rows] == [RESTOCK, PURCHASE, PURCHASE]

    def test_filters(self, client, admin_headers, history):
        sweet, _ = history
        resp = client.get(f"/api/inventory/transactions?sweet_id={sweet.id}&type=purchase", headers=admin_headers)
        rows = payload(resp)["transactions"]
        assert len(rows) == 1
        assert rows[0]["quantity"] == 2

    def test_unknown_type(self, client, admin_headers, history):
        resp = client.get("/api/inventory/transactions?type=gift", headers=admin_headers)
        assert resp.status_code == 400

    def test_admin_only(self, client, user_headers):
        assert client.get("/api/inventory/transactions", headers=user_headers).status_code == 403
