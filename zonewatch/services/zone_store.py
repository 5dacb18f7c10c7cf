"""
Zone Store Service

Client-side copy of the zones and activity log, synchronized with the
remote flat-file store through whole-snapshot GET/POST round trips.

Every public operation returns True/False and records the failure message
in `error`; expected failures never raise past this class. `rejected` tells
input the store refused locally apart from a failed round trip. In-memory
state is only replaced after the remote write succeeds.

Writes are refused until a load has succeeded: after a failed load the
local collections are empty, and saving them would overwrite the remote
snapshot.

The remote store has no versioning: two editors saving concurrently will
overwrite each other (last write wins).
"""

import logging
import requests

from zonewatch.models.zone import (
    Zone, ZoneLog, ZoneSnapshot, SEVERITIES, MIN_ZONE_POINTS,
    GeoPoint, next_identifier, utc_timestamp,
)

logger = logging.getLogger(__name__)

ZONE_ID_PREFIX = 'HRZ'
LOG_ID_PREFIX = 'LOG'
NOT_LOADED_MESSAGE = 'Zones are not loaded; retry loading first'


class ZoneStore:
    """Zones + logs owned by the editor, persisted to `<base_url>/zones`."""

    def __init__(self, base_url, session=None, timeout=6, officer='Police Department',
                 recent_log_limit=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.officer = officer
        self.recent_log_limit = recent_log_limit
        self.loading = False
        self.loaded = False
        self.error = None
        self.rejected = False
        self._zones = []
        self._logs = []

    @property
    def url(self):
        return f'{self.base_url}/zones'

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    @property
    def zones(self):
        return list(self._zones)

    @property
    def logs(self):
        return list(self._logs)

    @property
    def active_zones(self):
        return [z for z in self._zones if z.is_active]

    def recent_logs(self, limit=None):
        """Newest-first prefix of the activity log"""
        if limit is None:
            limit = self.recent_log_limit
        return self._logs[:max(0, int(limit))]

    def get_zone(self, zone_id):
        for zone in self._zones:
            if zone.id == zone_id:
                return zone
        return None

    @property
    def total_zones(self):
        return len(self._zones)

    @property
    def active_zone_count(self):
        return len(self.active_zones)

    @property
    def total_logs(self):
        return len(self._logs)

    def stats(self):
        return {
            'totalZones': self.total_zones,
            'activeZoneCount': self.active_zone_count,
            'totalLogs': self.total_logs,
        }

    def clear_error(self):
        self.error = None
        self.rejected = False

    # ------------------------------------------------------------------
    # Remote round trips
    # ------------------------------------------------------------------

    def load(self):
        """Fetch the full snapshot. A 404 is the empty initial state."""
        self.loading = True
        self.error = None
        self.rejected = False
        try:
            logger.info('Loading zones from %s', self.url)
            resp = self.session.get(self.url, timeout=self.timeout)

            if resp.status_code == 404:
                logger.info('No existing zones found, starting fresh')
                self._zones, self._logs = [], []
                self.loaded = True
                return True

            if not 200 <= resp.status_code < 300:
                return self._fail_load(f'HTTP error! status: {resp.status_code}')

            snapshot = ZoneSnapshot.from_dict(resp.json())
            self._zones, self._logs = snapshot.zones, snapshot.logs
            self.loaded = True
            logger.info('Loaded %d zones and %d logs', len(self._zones), len(self._logs))
            return True

        except requests.exceptions.Timeout:
            return self._fail_load('Request timed out')
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            return self._fail_load(str(e) or e.__class__.__name__)
        finally:
            self.loading = False

    def _fail_load(self, message):
        logger.error('Error loading zones: %s', message)
        self.error = message
        self.loaded = False
        self._zones, self._logs = [], []
        return False

    def save(self, zones, logs):
        """POST the complete snapshot; adopt it locally only on success."""
        if not self.loaded:
            return self._fail(NOT_LOADED_MESSAGE, 'saving zones')
        self.loading = True
        self.error = None
        self.rejected = False
        payload = ZoneSnapshot(zones=list(zones), logs=list(logs)).to_dict()
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)

            if not 200 <= resp.status_code < 300:
                return self._fail(_error_message(resp), 'saving zones')

            try:
                result = resp.json()
            except ValueError:
                result = {}
            if not isinstance(result, dict):
                result = {}
            logger.info('Zones data saved: %s', result.get('message', resp.status_code))

            self._zones = list(zones)
            self._logs = list(logs)
            return True

        except requests.exceptions.Timeout:
            return self._fail('Request timed out', 'saving zones')
        except requests.exceptions.RequestException as e:
            return self._fail(str(e) or e.__class__.__name__, 'saving zones')
        finally:
            self.loading = False

    # ------------------------------------------------------------------
    # Zone lifecycle
    # ------------------------------------------------------------------

    def create(self, name, description, points, severity):
        """Create an active zone and a 'created' log entry."""
        name = (name or '').strip()
        description = description or ''
        if not name:
            return self._reject('Zone name is required', 'creating zone')
        try:
            points = [GeoPoint.from_value(p) for p in points or []]
        except (ValueError, KeyError, TypeError):
            return self._reject('Zone coordinates are invalid', 'creating zone')
        if len(points) < MIN_ZONE_POINTS:
            return self._reject(f'A zone needs at least {MIN_ZONE_POINTS} points', 'creating zone')
        if severity not in SEVERITIES:
            return self._reject(f'Unknown severity: {severity}', 'creating zone')

        timestamp = utc_timestamp()
        zone = Zone(
            id=next_identifier(ZONE_ID_PREFIX, [z.id for z in self._zones]),
            name=name,
            description=description,
            coordinates=points,
            severity=severity,
            created_at=timestamp,
            created_by=self.officer,
            is_active=True,
        )
        entry = self._log_entry('created', name,
                                f'New {severity} severity zone created: {description}',
                                timestamp)

        logger.info('Creating new zone %s (%s)', zone.id, zone.name)
        return self.save(self._zones + [zone], [entry] + self._logs)

    def deactivate(self, zone_id):
        """Soft-delete: flip is_active and log 'deleted'."""
        zone = self.get_zone(zone_id)
        if zone is None:
            return self._fail('Zone not found', 'deleting zone')
        if not zone.is_active:
            return self._fail('Zone is already inactive', 'deleting zone')

        zones = [z.deactivated() if z.id == zone_id else z for z in self._zones]
        entry = self._log_entry('deleted', zone.name, 'High-risk zone deactivated')

        logger.info('Deactivating zone %s', zone_id)
        return self.save(zones, [entry] + self._logs)

    def update(self, zone_id, name=None, description=None, severity=None):
        """Edit the descriptive fields of an active zone and log 'modified'."""
        zone = self.get_zone(zone_id)
        if zone is None:
            return self._fail('Zone not found', 'updating zone')
        if not zone.is_active:
            return self._fail('Inactive zones cannot be modified', 'updating zone')

        changes = {}
        if name is not None:
            name = name.strip()
            if not name:
                return self._reject('Zone name is required', 'updating zone')
            if name != zone.name:
                changes['name'] = name
        if description is not None and description != zone.description:
            changes['description'] = description
        if severity is not None and severity != zone.severity:
            if severity not in SEVERITIES:
                return self._reject(f'Unknown severity: {severity}', 'updating zone')
            changes['severity'] = severity

        if not changes:
            return self._reject('No changes to save', 'updating zone')

        updated = Zone.from_dict({**zone.to_dict(), **changes})
        zones = [updated if z.id == zone_id else z for z in self._zones]
        entry = self._log_entry('modified', updated.name,
                                f'Zone updated: {", ".join(sorted(changes))}')

        logger.info('Updating zone %s: %s', zone_id, sorted(changes))
        return self.save(zones, [entry] + self._logs)

    def _log_entry(self, action, zone_name, details, timestamp=None):
        return ZoneLog(
            id=next_identifier(LOG_ID_PREFIX, [entry.id for entry in self._logs]),
            action=action,
            zone_name=zone_name,
            timestamp=timestamp or utc_timestamp(),
            officer=self.officer,
            details=details,
        )

    def _fail(self, message, action):
        logger.error('Error %s: %s', action, message)
        self.error = message
        self.rejected = False
        return False

    def _reject(self, message, action):
        """Invalid input; nothing was sent to the remote store."""
        logger.warning('Rejected %s: %s', action, message)
        self.error = message
        self.rejected = True
        return False


def _error_message(resp):
    """Best-effort error text from a failed store response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get('message') or body.get('error')
        if message and message is not True:
            return str(message)
    reason = getattr(resp, 'reason', None)
    return reason or f'HTTP error! status: {resp.status_code}'
