from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from marshmallow import ValidationError
from flask_smorest import Api
from flask_limiter.errors import RateLimitExceeded

from .utils.extensions import limiter
from .extensions import MongoDB, cors
from .utils.database_setup import setup_database_indexes
from .utils.plan.quota_enforcer import PlanLimitError

from .config import load_config
from .routes import register_routes
from .utils.error_handlers import (
    handle_permission_error, handle_validation_error, handle_plan_limit_error,
    handle_rate_limit, handle_unexpected_error,
)


def create_app(config_class=None, mongo_client=None):
    """
    Build the API application.

    config_class: one of the classes in fletoads.config; picked from APP_ENV
      when omitted.
    mongo_client: an already-built pymongo-compatible client (tests pass a
      mongomock client); a MongoClient for MONGO_URI is opened lazily otherwise.
    """
    app = Flask(__name__)

    # get actual client IP
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=1,      # Trust X-Forwarded-For
        x_proto=1,    # Trust X-Forwarded-Proto
        x_host=1,     # Trust X-Forwarded-Host
        x_port=1,     # Trust X-Forwarded-Port
        x_prefix=1    # Trust X-Forwarded-Prefix
    )

    load_config(app, config_class)

    api = Api(app)

    # Initialize all extensions
    MongoDB(client=mongo_client).init_app(app)
    limiter.init_app(app)
    cors.init_app(app, origins=app.config.get("ALLOWED_ORIGINS", "*"))

    with app.app_context():
        setup_database_indexes()

    # Register custom error handlers
    app.errorhandler(PermissionError)(handle_permission_error)
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(PlanLimitError)(handle_plan_limit_error)
    app.errorhandler(RateLimitExceeded)(handle_rate_limit)
    app.errorhandler(Exception)(handle_unexpected_error)

    register_routes(app, api)

    return app
