# sweetshop/model/cart.py
from __future__ import annotations
from decimal import Decimal

from ..extensions import db
from ..utils.dates import utcnow, isoformat
from ..utils.money import D, round_money, to_float


class Cart(db.Model):
    __tablename__ = "cart"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    items = db.relationship(
        "CartItem",
        backref="cart",
        cascade="all, delete-orphan",
        lazy="joined",
        order_by="CartItem.id.asc()",
    )

    def touch(self):
        self.updated_at = utcnow()

    def find_item(self, item_id) -> CartItem | None:
        return next((i for i in self.items if i.id == item_id), None)

    def find_item_by_sweet(self, sweet_id) -> CartItem | None:
        return next((i for i in self.items if i.sweet_id == sweet_id), None)

    # total is derived, never stored
    def total_dec(self) -> Decimal:
        return round_money(sum((i.line_total_dec() for i in self.items), Decimal("0")))

    def as_api(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "items": [i.as_api() for i in self.items],
            "total": float(self.total_dec()),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


class CartItem(db.Model):
    __tablename__ = "cart_item"
    __table_args__ = (
        db.CheckConstraint("quantity >= 1", name="ck_cart_item_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    cart_id = db.Column(db.Integer, db.ForeignKey("cart.id"), nullable=False, index=True)
    sweet_id = db.Column(db.Integer, db.ForeignKey("sweet.id"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    # price snapshot at add time; never re-priced
    price_at_added = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    sweet = db.relationship("Sweet", lazy="joined")

    def line_total_dec(self) -> Decimal:
        return round_money(D(self.price_at_added) * Decimal(self.quantity))

    def as_api(self):
        return {
            "id": self.id,
            "sweet_id": self.sweet_id,
            "quantity": self.quantity,
            "price_at_added": to_float(self.price_at_added),
            "line_total": float(self.line_total_dec()),
            "sweet": self.sweet.as_api() if self.sweet else None,
        }
