from flask import Blueprint

bp = Blueprint("sweet", __name__, url_prefix="/api/sweets")

from . import routes  # noqa: E402,F401
