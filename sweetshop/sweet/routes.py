# sweetshop/sweet/routes.py
from flask import request, url_for

from . import bp
from ..services import inventory_service
from ..utils.api import ok
from ..utils.decorators import login_required, admin_required


# GET /api/sweets
@bp.get("")
@login_required
def list_sweets(ctx):
    sweets = inventory_service.list_sweets()
    return ok("Sweets fetched", {"sweets": [s.as_api() for s in sweets]})


# GET /api/sweets/search?name=&category=&minPrice=&maxPrice=
@bp.get("/search")
@login_required
def search_sweets(ctx):
    sweets = inventory_service.search_sweets(
        name=(request.args.get("name") or "").strip(),
        category=(request.args.get("category") or "").strip(),
        min_price=request.args.get("minPrice"),
        max_price=request.args.get("maxPrice"),
    )
    return ok("Sweets fetched", {"sweets": [s.as_api() for s in sweets]})


# GET /api/sweets/<id>
@bp.get("/<int:sweet_id>")
@login_required
def get_sweet(sweet_id, ctx):
    return ok("Sweet fetched", {"sweet": inventory_service.get_sweet(sweet_id).as_api()})


# POST /api/sweets
@bp.post("")
@admin_required
def create_sweet(ctx):
    data = request.get_json(silent=True) or {}
    sweet = inventory_service.create_sweet(data)
    resp = ok("Sweet created", {"sweet": sweet.as_api()}, status_code=201)
    resp.headers["Location"] = url_for("sweet.get_sweet", sweet_id=sweet.id, _external=True)
    return resp


# PUT /api/sweets/<id>
@bp.put("/<int:sweet_id>")
@admin_required
def update_sweet(sweet_id, ctx):
    data = request.get_json(silent=True) or {}
    sweet = inventory_service.update_sweet(sweet_id, data)
    return ok("Sweet updated", {"sweet": sweet.as_api()})


# DELETE /api/sweets/<id>
@bp.delete("/<int:sweet_id>")
@admin_required
def delete_sweet(sweet_id, ctx):
    inventory_service.delete_sweet(sweet_id)
    return ok("Sweet deleted successfully", {"id": sweet_id})
