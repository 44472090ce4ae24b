# sweetshop/model/sweet.py
from ..extensions import db
from ..utils.dates import utcnow, isoformat
from ..utils.money import to_float


class Sweet(db.Model):
    __tablename__ = "sweet"
    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_sweet_quantity_non_negative"),
        db.CheckConstraint("price >= 0", name="ck_sweet_price_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    category = db.Column(db.String(120), nullable=False, index=True)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.Text, nullable=False, default="")
    image_url = db.Column(db.String(1024), nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def touch(self):
        self.updated_at = utcnow()

    def as_api(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": to_float(self.price),
            "quantity": self.quantity,
            "description": self.description or "",
            "image_url": self.image_url or "",
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
