"""
Configuration settings for the High-Risk Zone Editor
"""
import os


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Flat-file zone store served under /api/zones
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    ZONES_DATA_FILE = os.environ.get('ZONES_DATA_FILE') or \
        os.path.join(basedir, 'instance', 'data', 'zones.json')

    # Remote store the editor persists to
    ZONES_API_URL = os.environ.get('ZONES_API_URL') or 'http://localhost:5000/api'
    ZONES_API_TIMEOUT = float(os.environ.get('ZONES_API_TIMEOUT') or 6)

    # Seconds between background reloads of the zone store (0 disables)
    ZONES_REFRESH_INTERVAL = float(os.environ.get('ZONES_REFRESH_INTERVAL') or 30)

    # Acting officer recorded on zones and logs (no real auth in this service)
    DEFAULT_OFFICER = os.environ.get('DEFAULT_OFFICER') or 'Police Department'
    RECENT_LOG_LIMIT = 10


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    ZONES_API_URL = 'http://zonewatch.test/api'
    ZONES_REFRESH_INTERVAL = 0
