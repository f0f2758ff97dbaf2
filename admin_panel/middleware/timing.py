"""
Request timing and access logging.

Every response gets X-Request-ID (client-provided or generated) and
X-Request-Duration-Ms. One access line is logged per request, carrying
the outcome of the Basic Auth guard when the route is guarded:

    allowed / public  → DEBUG
    denied (401)      → INFO, with deny_reason
    throttled (429)   → WARNING
    server error      → ERROR
"""

import logging
import time
import uuid

from flask import Flask, g, request

logger = logging.getLogger(__name__)

# Load balancer probes: stamped, not logged
_SKIP_LOG = frozenset({"/api/v1/health/ready"})


def _access_extra(response, duration_ms: float) -> dict:
    """Structured fields for the access line; auth fields only when set."""
    extra = {
        "method": request.method,
        "path": request.path,
        "status": response.status_code,
        "duration_ms": duration_ms,
        "remote_addr": request.remote_addr,
        "request_id": getattr(g, "request_id", ""),
    }
    for key, attr in (("auth_result", "auth_result"),
                      ("deny_reason", "deny_reason"),
                      ("username", "auth_username")):
        value = getattr(g, attr, None)
        if value is not None:
            extra[key] = value
    return extra


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status == 429:
        return logging.WARNING
    if status == 401:
        return logging.INFO
    return logging.DEBUG


def init_request_timing(app: Flask):
    """Register before/after hooks for request timing."""

    @app.before_request
    def _start_timer():
        g.request_start = time.perf_counter()
        g.request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])

    @app.after_request
    def _log_request(response):
        start = getattr(g, "request_start", None)
        if start is None:
            return response

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        response.headers["X-Request-ID"] = getattr(g, "request_id", "")

        if request.path not in _SKIP_LOG:
            logger.log(
                _level_for(response.status_code),
                "%s %s %d (%.0fms)",
                request.method, request.path, response.status_code, duration_ms,
                extra=_access_extra(response, duration_ms),
            )
        return response
