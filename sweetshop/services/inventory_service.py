# sweetshop/services/inventory_service.py
"""
Sweet catalogue and stock ledger.

Stock invariants:
- Sweet.quantity never goes negative.
- Every stock change is a single conditional UPDATE, so two concurrent
  requests cannot both pass the check and overdraw the same sweet.
- Each purchase / restock appends exactly one Transaction row in the same
  database transaction as the stock change.
"""
from decimal import Decimal, InvalidOperation

from flask import current_app
from sqlalchemy import desc

from ..extensions import db
from ..errors import ValidationError, NotFound, InsufficientStock
from ..model import Sweet, CartItem, Transaction
from ..model.transaction import PURCHASE, RESTOCK, TRANSACTION_TYPES
from ..utils.dates import utcnow
from ..utils.money import parse_money, round_money
from ..utils.parse import parse_positive_int, parse_non_negative_int, parse_opt_float

REQUIRED_FIELDS = ("name", "category", "price", "quantity")
MAX_PRICE = Decimal("1e8")


# ---------- field validation ----------
def _clean_text(value, field):
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field} must not be empty")
    return text


def _clean_price(value):
    price = parse_money(value)
    # Numeric(10, 2) holds at most 8 integer digits
    if price is None or price < 0 or price >= MAX_PRICE:
        raise ValidationError("price must be a non-negative number")
    try:
        return round_money(price)
    except InvalidOperation:
        raise ValidationError("price must be a non-negative number")


_FIELD_CLEANERS = {
    "name": lambda v: _clean_text(v, "name"),
    "category": lambda v: _clean_text(v, "category"),
    "price": _clean_price,
    "quantity": lambda v: parse_non_negative_int(v, "quantity"),
    "description": lambda v: str(v or "").strip(),
    "image_url": lambda v: str(v or "").strip(),
}


def _clean_fields(data: dict) -> dict:
    return {field: clean(data[field]) for field, clean in _FIELD_CLEANERS.items() if field in data}


# ---------- catalogue ----------
def list_sweets():
    return Sweet.query.order_by(desc(Sweet.created_at), desc(Sweet.id)).all()


def search_sweets(name=None, category=None, min_price=None, max_price=None):
    query = Sweet.query
    if name:
        pattern = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = query.filter(Sweet.name.ilike(f"%{pattern}%", escape="\\"))
    if category:
        query = query.filter(Sweet.category == category)

    low = parse_opt_float(min_price, "minPrice")
    high = parse_opt_float(max_price, "maxPrice")
    if low is not None:
        query = query.filter(Sweet.price >= low)
    if high is not None:
        query = query.filter(Sweet.price <= high)
    return query.order_by(desc(Sweet.created_at), desc(Sweet.id)).all()


def get_sweet(sweet_id) -> Sweet:
    sweet = db.session.get(Sweet, sweet_id)
    if not sweet:
        raise NotFound("Sweet not found")
    return sweet


def create_sweet(data: dict) -> Sweet:
    if any(data.get(f) is None or data.get(f) == "" for f in REQUIRED_FIELDS):
        raise ValidationError("Name, category, price, and quantity are required")

    sweet = Sweet(**{"description": "", "image_url": "", **_clean_fields(data)})
    db.session.add(sweet)
    db.session.commit()
    current_app.logger.info("sweet %s created (%s)", sweet.id, sweet.name)
    return sweet


def update_sweet(sweet_id, data: dict) -> Sweet:
    sweet = get_sweet(sweet_id)
    for field, value in _clean_fields(data).items():
        setattr(sweet, field, value)
    sweet.touch()
    db.session.commit()
    return sweet


def delete_sweet(sweet_id):
    sweet = get_sweet(sweet_id)
    # carts are live state, orders and transactions keep their snapshots
    CartItem.query.filter(CartItem.sweet_id == sweet.id).delete(synchronize_session=False)
    db.session.delete(sweet)
    db.session.commit()
    current_app.logger.info("sweet %s deleted", sweet_id)


# ---------- stock movements ----------
def take_stock(sweet_id, quantity: int) -> bool:
    """Decrement stock if enough is left. Returns False when no row qualified."""
    updated = (
        Sweet.query
        .filter(Sweet.id == sweet_id, Sweet.quantity >= quantity)
        .update({Sweet.quantity: Sweet.quantity - quantity, Sweet.updated_at: utcnow()})
    )
    return updated == 1


def put_stock(sweet_id, quantity: int) -> bool:
    """Increment stock. Returns False when the sweet no longer exists."""
    updated = (
        Sweet.query
        .filter(Sweet.id == sweet_id)
        .update({Sweet.quantity: Sweet.quantity + quantity, Sweet.updated_at: utcnow()})
    )
    return updated == 1


def record_transaction(sweet_id, user_id, transaction_type, quantity):
    db.session.add(Transaction(
        sweet_id=sweet_id,
        user_id=user_id,
        transaction_type=transaction_type,
        quantity=quantity,
    ))


def purchase(sweet_id, quantity, user) -> Sweet:
    quantity = parse_positive_int(quantity)
    sweet = get_sweet(sweet_id)
    if quantity > sweet.quantity or not take_stock(sweet.id, quantity):
        db.session.rollback()
        raise InsufficientStock("Insufficient quantity in stock")

    record_transaction(sweet.id, user.id, PURCHASE, quantity)
    db.session.commit()
    current_app.logger.info("purchase: sweet=%s qty=%s user=%s", sweet.id, quantity, user.id)
    return get_sweet(sweet_id)


def restock(sweet_id, quantity, user) -> Sweet:
    quantity = parse_positive_int(quantity)
    sweet = get_sweet(sweet_id)
    if not put_stock(sweet.id, quantity):
        raise NotFound("Sweet not found")

    record_transaction(sweet.id, user.id, RESTOCK, quantity)
    db.session.commit()
    current_app.logger.info("restock: sweet=%s qty=%s user=%s", sweet.id, quantity, user.id)
    return get_sweet(sweet_id)


def list_transactions(sweet_id=None, transaction_type=None):
    query = Transaction.query
    if sweet_id is not None:
        query = query.filter(Transaction.sweet_id == sweet_id)
    if transaction_type:
        if transaction_type not in TRANSACTION_TYPES:
            raise ValidationError("Invalid transaction type")
        query = query.filter(Transaction.transaction_type == transaction_type)
    return query.order_by(desc(Transaction.created_at), desc(Transaction.id)).all()
