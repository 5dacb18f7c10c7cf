"""
High-Risk Zone Editor - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging

from flask import Flask
from zonewatch.extensions import zone_file_store
from zonewatch.config import Config


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    zone_file_store.init_app(app)

    # Register blueprints
    from zonewatch.api import api_bp
    from zonewatch.editor import editor_bp

    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(editor_bp, url_prefix='/editor')

    app.extensions['zone_editor'] = _build_editor(app)

    return app


def _build_editor(app):
    """Zone editor controller owned by this application instance."""
    from zonewatch.services.controller import ZoneEditorController
    from zonewatch.services.zone_store import ZoneStore

    store = ZoneStore(
        app.config['ZONES_API_URL'],
        timeout=app.config['ZONES_API_TIMEOUT'],
        officer=app.config['DEFAULT_OFFICER'],
        recent_log_limit=app.config['RECENT_LOG_LIMIT'],
    )
    return ZoneEditorController(store, refresh_interval=app.config['ZONES_REFRESH_INTERVAL'])
