"""
Admin Panel
Flask Application Factory.

Usage:
    from admin_panel import create_app
    app = create_app()           # defaults to APP_ENV or "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from admin_panel.config import config
from admin_panel.middleware.basic_auth import init_basic_auth
from admin_panel.middleware.logging_config import configure_logging
from admin_panel.middleware.rate_limiter import init_rate_limits
from admin_panel.middleware.timing import init_request_timing
from admin_panel.utils.errors import E, api_error

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.

    Raises:
        KeyError: unknown config_name.
        RuntimeError: production config without required env vars.
        ConfigurationError: unusable admin identity.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(
        __name__,
        template_folder="../templates",
        static_folder=None,
    )
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Basic auth identity (fails fast on bad config) ───────────────────
    init_basic_auth(app)

    # ── Request timing middleware ────────────────────────────────────────
    # Registered before the limiter so throttled requests are stamped too
    init_request_timing(app)

    # ── Extensions ───────────────────────────────────────────────────────
    # One limiter per app: limits and storage never leak between instances
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[],  # no global limit — apply per-blueprint
    )
    limiter.init_app(app)

    # ── Blueprints ───────────────────────────────────────────────────────
    from admin_panel.blueprints.admin_bp import admin_bp
    from admin_panel.blueprints.health_bp import health_bp
    from admin_panel.blueprints.home_bp import home_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(health_bp)

    init_rate_limits(app, limiter)

    # ── Error handlers ───────────────────────────────────────────────────
    @app.errorhandler(404)
    def not_found(e):
        return api_error(E.NOT_FOUND, "Not found", details={"path": request.path})

    @app.errorhandler(405)
    def method_not_allowed(e):
        return api_error(E.METHOD_NOT_ALLOWED, "Method not allowed")

    @app.errorhandler(429)
    def rate_limited(e):
        return api_error(E.RATE_LIMITED, "Too many requests", details={"limit": str(e.description)})

    @app.errorhandler(500)
    def server_error(e):
        logger.error("500 error: %s", e, exc_info=True)
        return api_error(E.INTERNAL, "Internal server error")

    return app
