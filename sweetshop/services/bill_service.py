# sweetshop/services/bill_service.py
from sqlalchemy import desc

from ..errors import Forbidden, NotFound
from ..model import Bill
from ..utils.decorators import can_access
from .filters import date_criteria


def list_bills(start_date=None, end_date=None):
    q = Bill.query
    for criterion in date_criteria(Bill.generated_at, start_date, end_date):
        q = q.filter(criterion)
    return q.order_by(desc(Bill.generated_at), desc(Bill.id)).all()


def _visible(bill, ctx) -> Bill:
    if not bill:
        raise NotFound("Bill not found")
    if not can_access(ctx, bill.user_id):
        raise Forbidden("Access denied")
    return bill


def get_by_order(order_id, ctx) -> Bill:
    return _visible(Bill.query.filter_by(order_id=order_id).first(), ctx)


def get_by_number(bill_number, ctx) -> Bill:
    return _visible(Bill.query.filter_by(bill_number=bill_number).first(), ctx)
