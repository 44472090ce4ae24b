# sweetshop/services/analytics_service.py
"""
Read-only sales figures.

Revenue only counts orders that are both completed and paid. Top sellers
count every completed order regardless of payment status.
"""
from datetime import datetime

import pandas as pd
from flask import current_app
from sqlalchemy import func

from ..extensions import db
from ..errors import ValidationError
from ..model import Order, OrderItem, Sweet, User
from ..model.order import COMPLETED, PAID, PENDING
from ..utils.dates import utcnow
from ..utils.money import D, round_money
from ..utils.parse import parse_positive_int
from .filters import date_criteria

# strftime pattern per grouping key
GROUP_FORMATS = {
    "day": "%Y-%m-%d",
    "month": "%Y-%m",
    "year": "%Y",
}


def _completed_orders(start_date=None, end_date=None, paid_only=True):
    q = Order.query.filter(Order.status == COMPLETED)
    if paid_only:
        q = q.filter(Order.payment_status == PAID)
    for criterion in date_criteria(Order.created_at, start_date, end_date):
        q = q.filter(criterion)
    return q


def revenue(start_date=None, end_date=None, group_by="day"):
    group_by = (group_by or "day").strip().lower()
    if group_by not in GROUP_FORMATS:
        raise ValidationError("group_by must be one of: day, month, year")

    rows = _completed_orders(start_date, end_date).with_entities(Order.created_at, Order.total).all()
    frame = pd.DataFrame(
        [(created_at, float(total)) for created_at, total in rows],
        columns=["created_at", "total"],
    )
    if frame.empty:
        return {
            "total_revenue": 0.0,
            "total_orders": 0,
            "average_order_value": 0.0,
            "revenue_by_date": [],
        }

    frame["period"] = pd.to_datetime(frame["created_at"]).dt.strftime(GROUP_FORMATS[group_by])
    grouped = (
        frame.groupby("period", sort=True)
        .agg(revenue=("total", "sum"), orders=("total", "size"))
        .reset_index()
    )

    total_revenue = float(frame["total"].sum())
    total_orders = int(len(frame))
    return {
        "total_revenue": round(total_revenue, 2),
        "total_orders": total_orders,
        "average_order_value": round(total_revenue / total_orders, 2),
        "revenue_by_date": [
            {"date": row.period, "revenue": round(float(row.revenue), 2), "orders": int(row.orders)}
            for row in grouped.itertuples(index=False)
        ],
    }


def top_sweets(limit=10, start_date=None, end_date=None):
    limit = parse_positive_int(10 if limit is None else limit, "limit must be a positive integer")

    q = (db.session.query(OrderItem.sweet_id, OrderItem.sweet_name, OrderItem.quantity, OrderItem.subtotal)
         .join(Order, OrderItem.order_id == Order.id)
         .filter(Order.status == COMPLETED))
    for criterion in date_criteria(Order.created_at, start_date, end_date):
        q = q.filter(criterion)

    frame = pd.DataFrame(
        [(sweet_id, name, int(qty), float(sub)) for sweet_id, name, qty, sub in q.all()],
        columns=["sweet_id", "sweet_name", "quantity", "subtotal"],
    )
    if frame.empty:
        return []

    grouped = (
        frame.groupby("sweet_id", sort=False)
        .agg(sweet_name=("sweet_name", "first"), quantity_sold=("quantity", "sum"), revenue=("subtotal", "sum"))
        .reset_index()
        .sort_values("quantity_sold", ascending=False, kind="stable")
        .head(limit)
    )
    return [
        {
            "sweet_id": int(row.sweet_id),
            "sweet_name": row.sweet_name,
            "quantity_sold": int(row.quantity_sold),
            "revenue": round(float(row.revenue), 2),
        }
        for row in grouped.itertuples(index=False)
    ]


def _revenue_since(since: datetime) -> float:
    total = (db.session.query(func.coalesce(func.sum(Order.total), 0))
             .filter(Order.created_at >= since, Order.status == COMPLETED, Order.payment_status == PAID)
             .scalar())
    return float(round_money(D(total)))


def _completed_count_since(since: datetime) -> int:
    return Order.query.filter(Order.created_at >= since, Order.status == COMPLETED).count()


def dashboard():
    today = utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    this_month = today.replace(day=1)
    this_year = today.replace(month=1, day=1)
    threshold = int(current_app.config.get("LOW_STOCK_THRESHOLD", 10))

    return {
        "today": {
            "orders": _completed_count_since(today),
            "revenue": _revenue_since(today),
        },
        "this_month": {
            "orders": _completed_count_since(this_month),
            "revenue": _revenue_since(this_month),
        },
        "this_year": {
            "revenue": _revenue_since(this_year),
        },
        "pending_orders": Order.query.filter(Order.status == PENDING).count(),
        "total_customers": User.query.filter(User.is_admin.is_(False)).count(),
        "low_stock_items": Sweet.query.filter(Sweet.quantity < threshold).count(),
        "total_sweets": Sweet.query.count(),
    }
