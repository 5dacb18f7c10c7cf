"""
Flat-File Zone Storage

The remote zone store keeps the whole {zones, logs} snapshot in a single
JSON file. Writes replace the file atomically; there are no partial
updates and no versioning.
"""

import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def empty_snapshot():
    return {'zones': [], 'logs': []}


class ZoneFileStore:
    """JSON file holding the zone snapshot, configured from ZONES_DATA_FILE."""

    def __init__(self, app=None):
        self.path = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.path = app.config['ZONES_DATA_FILE']
        app.extensions['zone_file_store'] = self
        logger.info('Zone data file: %s', self.path)

    def ensure_data_dir(self):
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)

    def exists(self):
        return os.path.exists(self.path)

    def read(self):
        """Return the stored snapshot, or an empty one if no file exists yet."""
        self.ensure_data_dir()
        if not self.exists():
            return empty_snapshot()
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError('Zones file does not contain a JSON object')
        logger.info('Loaded %d zones from file', len(data.get('zones') or []))
        return data

    def write(self, snapshot):
        """Replace the file with `snapshot` via a temp file and rename."""
        self.ensure_data_dir()
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix='.zones-', suffix='.json', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(snapshot, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.info('Saved %d zones to file', len(snapshot.get('zones') or []))

    def clear(self):
        if self.exists():
            self.write(empty_snapshot())
            logger.info('Cleared all zones data')
