import logging
from flask import Flask
from .config import Config
from .extensions import db, jwt, cors, migrate
from .utils.api import ok


def create_app(overrides=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    Config.init_app(app)
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    migrate.init_app(app, db)

    # Import models so metadata is complete before create_all / migrations
    from . import model  # noqa: F401

    # Register blueprints
    from .auth import bp as auth_bp; app.register_blueprint(auth_bp)
    from .sweet import bp as sweet_bp; app.register_blueprint(sweet_bp)
    from .inventory import bp as inventory_bp; app.register_blueprint(inventory_bp)
    from .cart import bp as cart_bp; app.register_blueprint(cart_bp)
    from .order import bp as order_bp; app.register_blueprint(order_bp)
    from .bill import bp as bill_bp; app.register_blueprint(bill_bp)
    from .analytics import bp as analytics_bp; app.register_blueprint(analytics_bp)

    from .errors import register_error_handlers
    register_error_handlers(app)

    from .cli import register_cli
    register_cli(app)

    @app.get("/health")
    def health():
        return ok("Server is running", {"ok": True})

    with app.app_context():
        db.create_all()

    app.logger.debug("blueprints: %s", sorted(app.blueprints.keys()))
    return app
