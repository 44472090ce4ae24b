from flask import Blueprint

bp = Blueprint("bill", __name__, url_prefix="/api/bills")

from . import routes  # noqa: E402,F401
