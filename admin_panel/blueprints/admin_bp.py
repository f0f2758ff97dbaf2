"""
Admin Blueprint — the page behind HTTP Basic Auth.

Routes:
    GET /admin  — renders admin/index.html for the configured admin
"""

import logging

from flask import Blueprint, g, render_template
from jinja2 import TemplateError

from admin_panel.middleware.basic_auth import require_basic_auth
from admin_panel.utils.errors import E, api_error

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)

ADMIN_TEMPLATE = "admin/index.html"


@admin_bp.route("/admin", methods=["GET"])
@require_basic_auth
def admin_index():
    """Admin landing page. A template failure is reported as 406."""
    try:
        return render_template(
            ADMIN_TEMPLATE,
            title="admin panel",
            message="Welcome!",
            username=g.auth_username,
        )
    except TemplateError as exc:
        logger.error("Admin page render failed: %s", exc, exc_info=True)
        return api_error(E.NOT_ACCEPTABLE, str(exc) or exc.__class__.__name__)
