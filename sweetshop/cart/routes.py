# sweetshop/cart/routes.py
from flask import request

from . import bp
from ..services import cart_service
from ..utils.api import ok
from ..utils.decorators import login_required


@bp.get("")
@login_required
def get_cart(ctx):
    cart = cart_service.get_cart(ctx.user)
    return ok("cart", {"cart": cart.as_api()})


@bp.post("/add")
@login_required
def add_item(ctx):
    """
    Body: { "sweet_id": int, "quantity": int }
    """
    data = request.get_json(silent=True) or {}
    cart = cart_service.add_item(ctx.user, data.get("sweet_id"), data.get("quantity"))
    return ok("item added", {"cart": cart.as_api()})


@bp.put("/item/<int:item_id>")
@login_required
def update_item(item_id, ctx):
    """
    Body: { "quantity": int }
    """
    data = request.get_json(silent=True) or {}
    cart = cart_service.update_item(ctx.user, item_id, data.get("quantity"))
    return ok("item updated", {"cart": cart.as_api()})


@bp.delete("/item/<int:item_id>")
@login_required
def remove_item(item_id, ctx):
    cart = cart_service.remove_item(ctx.user, item_id)
    return ok("item removed", {"cart": cart.as_api()})


@bp.delete("/clear")
@login_required
def clear_cart(ctx):
    cart = cart_service.clear(ctx.user)
    return ok("Cart cleared successfully", {"cart": cart.as_api()})
