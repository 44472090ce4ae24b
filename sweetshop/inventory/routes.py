# sweetshop/inventory/routes.py
from flask import request

from . import bp
from ..services import inventory_service
from ..utils.api import ok
from ..utils.decorators import login_required, admin_required


@bp.post("/sweets/<int:sweet_id>/purchase")
@login_required
def purchase(sweet_id, ctx):
    data = request.get_json(silent=True) or {}
    sweet = inventory_service.purchase(sweet_id, data.get("quantity"), ctx.user)
    return ok("Purchase successful", {"sweet": sweet.as_api()})


@bp.post("/sweets/<int:sweet_id>/restock")
@admin_required
def restock(sweet_id, ctx):
    data = request.get_json(silent=True) or {}
    sweet = inventory_service.restock(sweet_id, data.get("quantity"), ctx.user)
    return ok("Restock successful", {"sweet": sweet.as_api()})


@bp.get("/transactions")
@admin_required
def list_transactions(ctx):
    """
    Query params:
      - sweet_id=int
      - type=purchase|restock
    """
    rows = inventory_service.list_transactions(
        sweet_id=request.args.get("sweet_id", type=int),
        transaction_type=request.args.get("type"),
    )
    return ok("transactions", {"transactions": [t.as_api() for t in rows]})
