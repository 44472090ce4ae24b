# sweetshop/model/bill.py
from ..extensions import db
from ..utils.dates import utcnow, isoformat
from ..utils.money import to_float

PAYMENT_METHODS = ("cash", "card", "online")


class Bill(db.Model):
    __tablename__ = "bills"

    id = db.Column(db.Integer, primary_key=True)
    bill_number = db.Column(db.String(32), unique=True, nullable=False, index=True)  # e.g. "BILL-20251022-0042"
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    user_name = db.Column(db.String(180), nullable=False)
    user_email = db.Column(db.String(255), nullable=False)

    items_json = db.Column(db.JSON, nullable=False, default=list)  # [{sweet_name, quantity, price, subtotal}]
    subtotal = db.Column(db.Numeric(12, 2), nullable=False)
    tax = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total = db.Column(db.Numeric(12, 2), nullable=False)
    payment_method = db.Column(db.String(16), nullable=False, default="cash")
    generated_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    order = db.relationship("Order", lazy="joined", backref=db.backref("bill", uselist=False))

    def as_api(self):
        return {
            "id": self.id,
            "bill_number": self.bill_number,
            "order_id": self.order_id,
            "order": {
                "id": self.order.id,
                "order_number": self.order.order_number,
                "status": self.order.status,
                "payment_status": self.order.payment_status,
            } if self.order else None,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "user_email": self.user_email,
            "items": self.items_json or [],
            "subtotal": to_float(self.subtotal),
            "tax": to_float(self.tax),
            "total": to_float(self.total),
            "payment_method": self.payment_method,
            "generated_at": isoformat(self.generated_at),
        }
