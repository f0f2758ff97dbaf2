"""
HTTP Basic Auth guard for Flask views.

Adapts the framework-free credential gate to Flask:
    - ``init_basic_auth(app)`` validates ADMIN_USERNAME / ADMIN_PASSWORD once
      at startup and stores the immutable identity on ``app.extensions``
    - ``@require_basic_auth`` evaluates each request, short-circuits with a
      uniform 401 on deny, and otherwise calls the view

Usage:
    from admin_panel.middleware.basic_auth import require_basic_auth

    @admin_bp.route("/admin")
    @require_basic_auth
    def admin_index(): ...
"""

import functools
import logging
from dataclasses import dataclass

from flask import Flask, current_app, g, make_response, request

from admin_panel.core.exceptions import ConfigurationError
from admin_panel.services.credential_gate import (
    AdminIdentity,
    GateResult,
    RequestView,
    evaluate,
)
from admin_panel.utils.errors import E, api_error

logger = logging.getLogger(__name__)

EXTENSION_KEY = "basic_auth"


@dataclass(frozen=True)
class BasicAuthSettings:
    identity: AdminIdentity
    challenge_on_allow: bool = True


def _load_identity(app: Flask) -> AdminIdentity:
    username = app.config.get("ADMIN_USERNAME") or ""
    password = app.config.get("ADMIN_PASSWORD") or ""
    if not username:
        raise ConfigurationError("ADMIN_USERNAME", "must be set")
    if ":" in username:
        raise ConfigurationError("ADMIN_USERNAME", "must not contain ':'")
    if not password:
        raise ConfigurationError("ADMIN_PASSWORD", "must be set")
    return AdminIdentity(username=username, password=password)


def init_basic_auth(app: Flask) -> BasicAuthSettings:
    """Load the admin identity from config and register it on the app."""
    settings = BasicAuthSettings(
        identity=_load_identity(app),
        challenge_on_allow=bool(app.config.get("BASIC_AUTH_CHALLENGE_ON_ALLOW", True)),
    )
    app.extensions[EXTENSION_KEY] = settings
    app.logger.info(
        "Basic auth: enabled (user=%s, challenge_on_allow=%s)",
        settings.identity.username, settings.challenge_on_allow,
    )
    return settings


def get_settings() -> BasicAuthSettings:
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:
        raise ConfigurationError("basic_auth", "is not initialised; call init_basic_auth(app)") from None


def _unauthorized(result: GateResult):
    return api_error(E.UNAUTHORIZED, "Unauthorized", headers=dict(result.response_headers))


def require_basic_auth(f):
    """
    Decorator: require valid Basic credentials for the endpoint.

    Sets g.auth_username on success. Every deny path returns the same 401
    body with ``WWW-Authenticate: Basic``; the reason is only logged.
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        settings = get_settings()
        result = evaluate(
            RequestView.from_headers(request.headers),
            settings.identity,
            challenge_on_allow=settings.challenge_on_allow,
        )

        if not result.allowed:
            g.auth_result = "deny"
            g.deny_reason = result.reason.value
            logger.warning(
                "Basic auth denied: %s %s reason=%s",
                request.method, request.path, result.reason.value,
                extra={
                    "auth_result": "deny",
                    "deny_reason": result.reason.value,
                    "path": request.path,
                    "remote_addr": request.remote_addr,
                    "request_id": getattr(g, "request_id", ""),
                },
            )
            return _unauthorized(result)

        g.auth_result = "allow"
        g.auth_username = result.decision.username
        logger.debug(
            "Basic auth allowed: %s %s",
            request.method, request.path,
            extra={"auth_result": "allow", "username": result.decision.username},
        )
        response = make_response(f(*args, **kwargs))
        for name, value in result.response_headers:
            response.headers[name] = value
        return response

    return decorated
