"""
Home Blueprint — public landing route.

Routes:
    GET /  — plain-text greeting, no authentication
"""

from flask import Blueprint

home_bp = Blueprint("home", __name__)

GREETING = "Hello World!"


@home_bp.route("/", methods=["GET"])
def index():
    return GREETING, 200, {"Content-Type": "text/plain; charset=utf-8"}
