# sweetshop/services/order_service.py
"""
Checkout, order lifecycle and bill generation.

Order.status:          pending -> processing -> completed
                       pending/processing -> cancelled   (customer or admin)
Order.payment_status:  pending -> paid (non-cash at checkout)
                       paid -> refunded (only through cancellation)

create_order runs as one database transaction: stock, cart, order and bill
are committed together or not at all.

update_status is the admin override and deliberately skips the transition
table (any -> any); cancel_order is the guarded path.
"""
from decimal import Decimal

from flask import current_app
from sqlalchemy import desc

from ..extensions import db
from ..errors import EmptyCart, Forbidden, InsufficientStock, InvalidTransition, NotFound, ValidationError
from ..model import Bill, Cart, Order, OrderItem, Sweet
from ..model.bill import PAYMENT_METHODS
from ..model.order import (
    PENDING, COMPLETED, CANCELLED, ORDER_STATUSES,
    PAYMENT_PENDING, PAID, REFUNDED, PAYMENT_STATUSES,
)
from ..model.transaction import PURCHASE, RESTOCK
from ..utils.decorators import can_access
from ..utils.money import D, round_money
from .filters import date_criteria, one_of
from .inventory_service import take_stock, put_stock, record_transaction
from .numbering import new_order_number, new_bill_number


def _tax_rate() -> Decimal:
    return D(current_app.config.get("TAX_RATE", "0.10"))


def _shortfall(name, available, requested):
    return InsufficientStock(
        f"Insufficient stock for {name}. Available: {available}, Requested: {requested}",
        data={"sweet_name": name, "available": available, "requested": requested},
    )


def create_order(user, payment_method="cash"):
    payment_method = str(payment_method or "cash").strip().lower()
    if payment_method not in PAYMENT_METHODS:
        raise ValidationError("payment_method must be one of: " + ", ".join(PAYMENT_METHODS))

    cart = Cart.query.filter_by(user_id=user.id).first()
    if not cart or not cart.items:
        raise EmptyCart("Cart is empty")

    # Lock sweet rows to avoid oversell (no-op on SQLite; the conditional update still guards)
    ids = [i.sweet_id for i in cart.items]
    sweets = {s.id: s for s in Sweet.query.filter(Sweet.id.in_(ids)).with_for_update().all()}

    order_items = []
    for it in cart.items:
        sweet = sweets.get(it.sweet_id)
        if not sweet:
            raise NotFound(f"Sweet {it.sweet_id} is no longer available")
        if sweet.quantity < it.quantity:
            raise _shortfall(sweet.name, sweet.quantity, it.quantity)

        price = round_money(it.price_at_added)
        order_items.append(OrderItem(
            sweet_id=sweet.id,
            sweet_name=sweet.name,
            quantity=it.quantity,
            price=price,
            subtotal=round_money(price * it.quantity),
        ))

    subtotal = round_money(sum((i.subtotal for i in order_items), Decimal("0")))
    tax = round_money(subtotal * _tax_rate())
    total = round_money(subtotal + tax)

    try:
        order = Order(
            order_number=new_order_number(),
            user_id=user.id,
            items=order_items,
            subtotal=subtotal,
            tax=tax,
            total=total,
            status=PENDING,
            payment_status=PAYMENT_PENDING if payment_method == "cash" else PAID,
        )
        db.session.add(order)

        for oi in order_items:
            if not take_stock(oi.sweet_id, oi.quantity):
                current = db.session.get(Sweet, oi.sweet_id)
                raise _shortfall(oi.sweet_name, current.quantity if current else 0, oi.quantity)
            record_transaction(oi.sweet_id, user.id, PURCHASE, oi.quantity)

        cart.items.clear()
        cart.touch()

        bill = Bill(
            bill_number=new_bill_number(),
            order=order,
            user_id=user.id,
            user_name=user.full_name,
            user_email=user.email,
            items_json=[oi.snapshot() for oi in order_items],
            subtotal=subtotal,
            tax=tax,
            total=total,
            payment_method=payment_method,
        )
        db.session.add(bill)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "order %s created for user %s: %d item(s), total %s, bill %s",
        order.order_number, user.id, len(order_items), total, bill.bill_number,
    )
    return order, bill


def list_my_orders(user):
    return (Order.query
            .filter(Order.user_id == user.id)
            .order_by(desc(Order.created_at), desc(Order.id))
            .all())


def list_orders(status=None, payment_status=None, start_date=None, end_date=None):
    q = Order.query
    if status:
        q = q.filter(Order.status == one_of(status, ORDER_STATUSES, "status"))
    if payment_status:
        q = q.filter(Order.payment_status == one_of(payment_status, PAYMENT_STATUSES, "payment_status"))
    for criterion in date_criteria(Order.created_at, start_date, end_date):
        q = q.filter(criterion)
    return q.order_by(desc(Order.created_at), desc(Order.id)).all()


def _get(order_id) -> Order:
    order = db.session.get(Order, order_id)
    if not order:
        raise NotFound("Order not found")
    return order


def get_order(order_id, ctx) -> Order:
    order = _get(order_id)
    if not can_access(ctx, order.user_id):
        raise Forbidden("Access denied")
    return order


def update_status(order_id, status) -> Order:
    if status not in ORDER_STATUSES:
        raise ValidationError("Invalid status")
    order = _get(order_id)
    previous = order.status
    order.set_status(status)
    db.session.commit()
    current_app.logger.info("order %s status %s -> %s", order.order_number, previous, status)
    return order


def cancel_order(order_id, ctx) -> Order:
    order = _get(order_id)
    if not can_access(ctx, order.user_id):
        raise Forbidden("Access denied")
    if order.status == COMPLETED:
        raise InvalidTransition("Cannot cancel completed order")
    if order.status == CANCELLED:
        raise InvalidTransition("Order already cancelled")

    for item in order.items:
        if put_stock(item.sweet_id, item.quantity):
            record_transaction(item.sweet_id, ctx.user.id, RESTOCK, item.quantity)
        else:
            current_app.logger.warning(
                "order %s: sweet %s no longer exists, skipping restock of %s",
                order.order_number, item.sweet_id, item.quantity,
            )

    order.set_status(CANCELLED)
    if order.payment_status == PAID:
        order.payment_status = REFUNDED
    db.session.commit()
    current_app.logger.info("order %s cancelled by user %s", order.order_number, ctx.user.id)
    return order
