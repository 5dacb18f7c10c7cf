"""
Zone Store API Blueprint

Serves the whole-snapshot GET/POST endpoints the zone editor persists to.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from zonewatch.api import routes  # noqa: E402, F401
