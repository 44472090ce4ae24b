# sweetshop/model/transaction.py
from ..extensions import db
from ..utils.dates import utcnow, isoformat

PURCHASE = "purchase"
RESTOCK = "restock"
TRANSACTION_TYPES = (PURCHASE, RESTOCK)


class Transaction(db.Model):
    """Append-only stock movement record."""
    __tablename__ = "transactions"
    __table_args__ = (
        db.CheckConstraint("quantity >= 1", name="ck_transaction_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    # no FK: history outlives deleted sweets
    sweet_id = db.Column(db.Integer, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    transaction_type = db.Column(db.String(16), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def as_api(self):
        return {
            "id": self.id,
            "sweet_id": self.sweet_id,
            "user_id": self.user_id,
            "transaction_type": self.transaction_type,
            "quantity": self.quantity,
            "created_at": isoformat(self.created_at),
        }
