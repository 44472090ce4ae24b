# sweetshop/bill/routes.py
from flask import request

from . import bp
from ..services import bill_service
from ..utils.api import ok
from ..utils.decorators import login_required, admin_required


@bp.get("")
@admin_required
def list_bills(ctx):
    """
    Query params:
      - start_date, end_date (YYYY-MM-DD, inclusive)
    """
    bills = bill_service.list_bills(
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )
    return ok("bills", {"bills": [b.as_api() for b in bills]})


@bp.get("/order/<int:order_id>")
@login_required
def get_bill_by_order(order_id, ctx):
    return ok("bill", {"bill": bill_service.get_by_order(order_id, ctx).as_api()})


@bp.get("/<bill_number>")
@login_required
def get_bill(bill_number, ctx):
    return ok("bill", {"bill": bill_service.get_by_number(bill_number, ctx).as_api()})
