"""
Admin Panel
Configuration classes for Flask App Factory.

Usage:
    config_name = os.getenv("APP_ENV", "development")
    app.config.from_object(config[config_name])

The admin identity is read here, once, and never embedded elsewhere in
source. ``init_basic_auth`` turns it into an immutable ``AdminIdentity``.
"""

import os
import secrets

# Generate a random key for development; production MUST use a stable env var
_DEV_SECRET = secrets.token_hex(32)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in ("false", "0", "no", "off")


class Config:
    """Base configuration shared across all environments."""

    SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
    DEBUG = False
    TESTING = False

    # Basic auth
    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
    # Send WWW-Authenticate on successful responses too (observed behavior)
    BASIC_AUTH_CHALLENGE_ON_ALLOW = _env_flag("BASIC_AUTH_CHALLENGE_ON_ALLOW", "true")

    # Rate limiting (guarded routes only)
    ADMIN_RATE_LIMIT = os.getenv("ADMIN_RATE_LIMIT", "10/minute")
    RATELIMIT_STORAGE_URI = os.getenv("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = True


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    # ADMIN_PASSWORD must come from the environment; create_app fails fast without it


class TestingConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    ADMIN_USERNAME = "admin"
    ADMIN_PASSWORD = "admin password"
    BASIC_AUTH_CHALLENGE_ON_ALLOW = True
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False

    def __init__(self):
        # Re-read at instantiation so the environment at startup wins
        self.SECRET_KEY = os.getenv("SECRET_KEY")
        self.ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
        self.ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
        if not self.SECRET_KEY:
            raise RuntimeError("SECRET_KEY environment variable must be set in production")
        if not self.ADMIN_PASSWORD:
            raise RuntimeError("ADMIN_PASSWORD environment variable must be set in production")


# Configuration mapping: environment name -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
