# ------- sweetshop/utils/decorators.py -------
from collections import namedtuple
from functools import wraps

from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from ..extensions import db
from ..errors import Unauthorized, Forbidden
from ..model.user import User

# Resolved identity handed to views as the ``ctx`` keyword argument.
AuthContext = namedtuple("AuthContext", ["user", "is_admin", "is_super_admin"])


def resolve_context(refresh=False) -> AuthContext:
    try:
        verify_jwt_in_request(refresh=refresh)
        uid = int(get_jwt_identity())
    except (JWTExtendedException, PyJWTError, TypeError, ValueError):
        raise Unauthorized("Invalid token")

    user = db.session.get(User, uid)
    if not user:
        raise Unauthorized("Invalid token")
    return AuthContext(user=user, is_admin=bool(user.is_admin), is_super_admin=bool(user.is_super_admin))


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ctx = resolve_context()
        return fn(*args, ctx=ctx, **kwargs)
    return wrapper


def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ctx = resolve_context()
        if not ctx.is_admin:
            raise Forbidden("Admin access required")
        return fn(*args, ctx=ctx, **kwargs)
    return wrapper


def super_admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ctx = resolve_context()
        if not ctx.is_super_admin:
            raise Forbidden("Super admin access required")
        return fn(*args, ctx=ctx, **kwargs)
    return wrapper


def refresh_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ctx = resolve_context(refresh=True)
        return fn(*args, ctx=ctx, **kwargs)
    return wrapper


def can_access(ctx: AuthContext, owner_id) -> bool:
    return ctx.is_admin or ctx.user.id == owner_id
