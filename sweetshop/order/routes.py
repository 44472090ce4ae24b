# sweetshop/order/routes.py
from flask import request

from . import bp
from ..services import order_service
from ..utils.api import ok
from ..utils.decorators import login_required, admin_required


@bp.post("/create")
@login_required
def create_order(ctx):
    """
    Body: { "payment_method": "cash" | "card" | "online" }   (default cash)
    """
    data = request.get_json(silent=True) or {}
    order, bill = order_service.create_order(ctx.user, data.get("payment_method") or "cash")
    resp = ok("Order created successfully", {"order": order.as_api(), "bill": bill.as_api()}, status_code=201)
    resp.headers["X-Order-Id"] = str(order.id)
    return resp


@bp.get("/my-orders")
@login_required
def my_orders(ctx):
    orders = order_service.list_my_orders(ctx.user)
    return ok("orders", {"orders": [o.as_api() for o in orders]})


@bp.get("")
@admin_required
def list_orders(ctx):
    """
    Query params:
      - status=pending|processing|completed|cancelled
      - payment_status=pending|paid|refunded
      - start_date=YYYY-MM-DD
      - end_date=YYYY-MM-DD (inclusive)
    """
    orders = order_service.list_orders(
        status=request.args.get("status"),
        payment_status=request.args.get("payment_status"),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )
    return ok("orders", {"orders": [o.as_api() for o in orders]})


@bp.get("/<int:order_id>")
@login_required
def get_order(order_id, ctx):
    return ok("order", {"order": order_service.get_order(order_id, ctx).as_api()})


@bp.put("/<int:order_id>/status")
@admin_required
def update_status(order_id, ctx):
    data = request.get_json(silent=True) or {}
    order = order_service.update_status(order_id, data.get("status"))
    return ok("Order status updated", {"order": order.as_api()})


@bp.post("/<int:order_id>/cancel")
@login_required
def cancel_order(order_id, ctx):
    order = order_service.cancel_order(order_id, ctx)
    return ok("Order cancelled successfully", {"order": order.as_api()})
