from flask import request, current_app
from flask_jwt_extended import create_access_token, create_refresh_token

from . import bp
from ..extensions import db
from ..errors import ValidationError, Unauthorized, Conflict, NotFound
from ..model import User
from ..utils.api import ok
from ..utils.decorators import login_required, super_admin_required, refresh_required
from ..utils.parse import parse_bool


# --- helper: token pair for a user ---
def _session_for(user: User):
    identity = str(user.id)
    return {
        "access_token": create_access_token(identity=identity),
        "refresh_token": create_refresh_token(identity=identity),
    }


def _auth_payload(user: User):
    return {
        "user": user.as_api(),
        "session": _session_for(user),
        "isAdmin": user.is_admin,
        "isSuperAdmin": user.is_super_admin,
    }


@bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    raw = (data.get("email"), data.get("password"), data.get("fullName") or data.get("full_name"))
    if not all(isinstance(v, str) for v in raw):
        raise ValidationError("Email, password, and full name are required")

    email = User.normalize_email(raw[0])
    password = raw[1]
    full_name = raw[2].strip()
    if not email or not password or not full_name:
        raise ValidationError("Email, password, and full name are required")
    min_len = current_app.config.get("MIN_PASSWORD_LENGTH", 6)
    if len(password) < min_len:
        raise ValidationError(f"Password must be at least {min_len} characters")
    if User.query.filter_by(email=email).first():
        raise Conflict("User already exists")

    user = User.create(email=email, password=password, full_name=full_name)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("user %s registered", user.id)

    return ok("Account created successfully", _auth_payload(user), status_code=201)


@bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    email, password = data.get("email"), data.get("password")
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Email and password are required")

    email = User.normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        raise Unauthorized("Invalid credentials")

    return ok("You've logged in successfully", _auth_payload(user))


@bp.post("/refresh")
@refresh_required
def refresh(ctx):
    return ok("Token refreshed", {"session": _session_for(ctx.user)})


@bp.get("/me")
@login_required
def me(ctx):
    return ok("OK", {
        "user": ctx.user.as_api(),
        "isAdmin": ctx.is_admin,
        "isSuperAdmin": ctx.is_super_admin,
    })


@bp.patch("/users/<int:user_id>/role")
@super_admin_required
def update_user_role(user_id, ctx):
    body = request.get_json(silent=True) or {}
    if "is_admin" not in body:
        raise ValidationError("is_admin is required")

    target = db.session.get(User, user_id)
    if not target:
        raise NotFound("User not found")
    if target.is_super_admin:
        raise ValidationError("Cannot change the role of a super admin")

    target.is_admin = parse_bool(body.get("is_admin"))
    db.session.commit()
    current_app.logger.info("user %s admin=%s (by %s)", target.id, target.is_admin, ctx.user.id)
    return ok("Role updated", {"user": target.as_api()})
