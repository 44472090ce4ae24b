from ..extensions import db
from ..utils.dates import utcnow, isoformat
from ..utils.money import to_float

PENDING = "pending"
PROCESSING = "processing"
COMPLETED = "completed"
CANCELLED = "cancelled"
ORDER_STATUSES = (PENDING, PROCESSING, COMPLETED, CANCELLED)

PAYMENT_PENDING = "pending"
PAID = "paid"
REFUNDED = "refunded"
PAYMENT_STATUSES = (PAYMENT_PENDING, PAID, REFUNDED)


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(32), unique=True, nullable=False, index=True)  # e.g. "ORD-12345678-042"
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)

    # Money snapshot
    subtotal = db.Column(db.Numeric(12, 2), nullable=False)
    tax = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total = db.Column(db.Numeric(12, 2), nullable=False)

    status = db.Column(db.String(20), nullable=False, default=PENDING, index=True)
    payment_status = db.Column(db.String(20), nullable=False, default=PAYMENT_PENDING, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship("User", lazy="joined")
    items = db.relationship(
        "OrderItem",
        backref="order",
        cascade="all, delete-orphan",
        lazy="joined",
        order_by="OrderItem.id.asc()",
    )

    def touch(self):
        self.updated_at = utcnow()

    def set_status(self, status: str):
        self.status = status
        if status == COMPLETED and self.completed_at is None:
            self.completed_at = utcnow()
        self.touch()

    def as_api(self):
        return {
            "id": self.id,
            "order_number": self.order_number,
            "user_id": self.user_id,
            "user": {
                "id": self.user.id,
                "email": self.user.email,
                "full_name": self.user.full_name,
            } if self.user else None,
            "items": [i.as_api() for i in self.items],
            "subtotal": to_float(self.subtotal),
            "tax": to_float(self.tax),
            "total": to_float(self.total),
            "status": self.status,
            "payment_status": self.payment_status,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
            "completed_at": isoformat(self.completed_at),
        }


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, index=True)

    # snapshot, not a FK constraint
    sweet_id = db.Column(db.Integer, nullable=False, index=True)
    sweet_name = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    subtotal = db.Column(db.Numeric(12, 2), nullable=False)

    def snapshot(self):
        return {
            "sweet_name": self.sweet_name,
            "quantity": self.quantity,
            "price": to_float(self.price),
            "subtotal": to_float(self.subtotal),
        }

    def as_api(self):
        return {
            "id": self.id,
            "sweet_id": self.sweet_id,
            **self.snapshot(),
        }
