# sweetshop/errors.py
from flask import current_app
from werkzeug.exceptions import HTTPException

from .extensions import db
from .utils.api import err


class ApiError(Exception):
    status_code = 400

    def __init__(self, message, data=None):
        super().__init__(message)
        self.message = message
        self.data = data


class ValidationError(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 400


class InsufficientStock(ApiError):
    status_code = 400


class EmptyCart(ApiError):
    status_code = 400


class InvalidTransition(ApiError):
    status_code = 400


class InternalError(ApiError):
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e):
        db.session.rollback()
        if e.status_code >= 500:
            current_app.logger.error("%s: %s", type(e).__name__, e.message)
        return err(e.message, e.status_code, e.data)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        message = "Not found" if e.code == 404 else (e.description or e.name)
        return err(message, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        current_app.logger.exception("Unhandled error")
        return err(str(e) or "Internal server error", 500)
