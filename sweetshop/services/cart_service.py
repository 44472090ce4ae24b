# sweetshop/services/cart_service.py
from __future__ import annotations

from ..extensions import db
from ..errors import NotFound, InsufficientStock
from ..model import Cart, CartItem, Sweet
from ..utils.parse import parse_positive_int


def _find_cart(user) -> Cart | None:
    return Cart.query.filter_by(user_id=user.id).first()


def _require_cart(user) -> Cart:
    cart = _find_cart(user)
    if not cart:
        raise NotFound("Cart not found")
    return cart


def get_cart(user) -> Cart:
    """Return the user's cart, creating an empty one on first use."""
    cart = _find_cart(user)
    if not cart:
        cart = Cart(user_id=user.id)
        db.session.add(cart)
        db.session.commit()
    return cart


def add_item(user, sweet_id, quantity) -> Cart:
    message = "Sweet ID and valid quantity are required"
    sweet_id = parse_positive_int(sweet_id, message)
    quantity = parse_positive_int(quantity, message)

    sweet = db.session.get(Sweet, sweet_id)
    if not sweet:
        raise NotFound("Sweet not found")
    if sweet.quantity < quantity:
        raise InsufficientStock("Insufficient stock available")

    cart = get_cart(user)
    item = cart.find_item_by_sweet(sweet.id)
    if item:
        new_qty = item.quantity + quantity
        if sweet.quantity < new_qty:
            raise InsufficientStock("Insufficient stock available")
        item.quantity = new_qty
    else:
        cart.items.append(CartItem(
            sweet_id=sweet.id,
            quantity=quantity,
            price_at_added=sweet.price,
        ))

    cart.touch()
    db.session.commit()
    return cart


def update_item(user, item_id, quantity) -> Cart:
    quantity = parse_positive_int(quantity, "Valid quantity is required")
    cart = _require_cart(user)
    item = cart.find_item(item_id)
    if not item:
        raise NotFound("Item not found in cart")

    sweet = db.session.get(Sweet, item.sweet_id)
    if not sweet or sweet.quantity < quantity:
        raise InsufficientStock("Insufficient stock available")

    item.quantity = quantity
    cart.touch()
    db.session.commit()
    return cart


def remove_item(user, item_id) -> Cart:
    cart = _require_cart(user)
    item = cart.find_item(item_id)
    if item:
        # delete-orphan cascade removes the row
        cart.items.remove(item)
        cart.touch()
        db.session.commit()
    return cart


def clear(user) -> Cart:
    cart = _require_cart(user)
    cart.items.clear()
    cart.touch()
    db.session.commit()
    return cart
