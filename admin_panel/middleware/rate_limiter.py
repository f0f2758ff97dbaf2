"""
Rate limiting for guarded routes.

Basic Auth has no lockout of its own, so the admin blueprint gets a
per-remote-address limit (ADMIN_RATE_LIMIT) to slow down credential
guessing. The Limiter instance is created in admin_panel/__init__.py with
no default limits; this module applies them per blueprint.

Usage:
    from admin_panel.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)

# Blueprints whose routes sit behind @require_basic_auth
GUARDED_BLUEPRINTS = ("admin",)

# Never throttled (load balancer probes)
EXEMPT_BLUEPRINTS = ("health",)


def init_rate_limits(app, limiter):
    """
    Apply rate limits to blueprints.

    Limits (per remote IP):
        - Guarded blueprints: ADMIN_RATE_LIMIT (default 10/minute)
        - Health check:       exempt

    Rate limiting is disabled when RATELIMIT_ENABLED is false (testing).
    """
    if not app.config.get("RATELIMIT_ENABLED", True):
        app.logger.info("Rate limiter disabled (RATELIMIT_ENABLED=False)")
        return

    admin_limit = app.config.get("ADMIN_RATE_LIMIT", "10/minute")
    for bp_name in GUARDED_BLUEPRINTS:
        bp = app.blueprints.get(bp_name)
        if bp:
            limiter.limit(admin_limit)(bp)

    for bp_name in EXEMPT_BLUEPRINTS:
        bp = app.blueprints.get(bp_name)
        if bp:
            limiter.exempt(bp)

    app.logger.info("Rate limiter configured — guarded: %s", admin_limit)
