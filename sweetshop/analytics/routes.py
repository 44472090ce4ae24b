# sweetshop/analytics/routes.py
from flask import request

from . import bp
from ..services import analytics_service
from ..utils.api import ok
from ..utils.decorators import admin_required


@bp.get("/revenue")
@admin_required
def revenue(ctx):
    """
    Query params:
      - start_date, end_date (YYYY-MM-DD, inclusive)
      - group_by=day|month|year (default day)
    """
    data = analytics_service.revenue(
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
        group_by=request.args.get("group_by", "day"),
    )
    return ok("revenue", data)


@bp.get("/top-sweets")
@admin_required
def top_sweets(ctx):
    sweets = analytics_service.top_sweets(
        limit=request.args.get("limit", 10),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )
    return ok("top sweets", {"sweets": sweets})


@bp.get("/dashboard")
@admin_required
def dashboard(ctx):
    return ok("dashboard", analytics_service.dashboard())
