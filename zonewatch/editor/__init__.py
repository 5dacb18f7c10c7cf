"""
Zone Editor Blueprint

JSON endpoints driving the high-risk zone editor.
"""

from flask import Blueprint

editor_bp = Blueprint('editor', __name__)

from zonewatch.editor import routes  # noqa: E402, F401
