"""
Zone Models

High-risk zones and their activity log, as exchanged with the zone store.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


SEVERITIES = ('low', 'medium', 'high', 'critical')
LOG_ACTIONS = ('created', 'deleted', 'modified')

MIN_ZONE_POINTS = 3


def utc_timestamp():
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair"""
    lat: float
    lng: float

    @classmethod
    def from_value(cls, value):
        """Accept a GeoPoint, a {'lat', 'lng'} mapping or a (lat, lng) pair."""
        if isinstance(value, GeoPoint):
            return value
        if isinstance(value, dict):
            return cls(lat=float(value['lat']), lng=float(value['lng']))
        lat, lng = value
        return cls(lat=float(lat), lng=float(lng))

    def to_dict(self):
        return {'lat': self.lat, 'lng': self.lng}


@dataclass
class Zone:
    """A named polygonal area flagged with a severity level"""
    id: str
    name: str
    description: str
    coordinates: list
    severity: str
    created_at: str
    created_by: str
    is_active: bool = True

    def __post_init__(self):
        self.coordinates = [GeoPoint.from_value(p) for p in self.coordinates]

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            description=data.get('description', ''),
            coordinates=data.get('coordinates') or [],
            severity=data.get('severity', ''),
            created_at=data.get('createdAt', ''),
            created_by=data.get('createdBy', ''),
            is_active=bool(data.get('isActive', True)),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'coordinates': [p.to_dict() for p in self.coordinates],
            'severity': self.severity,
            'createdAt': self.created_at,
            'createdBy': self.created_by,
            'isActive': self.is_active,
        }

    def deactivated(self):
        """Copy of this zone with the active flag cleared."""
        return replace(self, is_active=False)

    def __repr__(self):
        return f'<Zone {self.id} {self.name}>'


@dataclass(frozen=True)
class ZoneLog:
    """Append-only audit entry for a zone lifecycle event"""
    id: str
    action: str
    zone_name: str
    timestamp: str
    officer: str
    details: str = ''

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            action=data.get('action', ''),
            zone_name=data.get('zoneName', ''),
            timestamp=data.get('timestamp', ''),
            officer=data.get('officer', ''),
            details=data.get('details', ''),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'action': self.action,
            'zoneName': self.zone_name,
            'timestamp': self.timestamp,
            'officer': self.officer,
            'details': self.details,
        }

    def __repr__(self):
        return f'<ZoneLog {self.id} {self.action}:{self.zone_name}>'


@dataclass
class ZoneSnapshot:
    """The full {zones, logs} document persisted by the zone store"""
    zones: list = field(default_factory=list)
    logs: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            zones=[Zone.from_dict(z) for z in data.get('zones') or []],
            logs=[ZoneLog.from_dict(entry) for entry in data.get('logs') or []],
        )

    def to_dict(self):
        return {
            'zones': [z.to_dict() for z in self.zones],
            'logs': [entry.to_dict() for entry in self.logs],
        }


def next_identifier(prefix, existing_ids):
    """Sequential identifier based on collection size, e.g. HRZ001.

    Numbers already taken are skipped, so a hand-edited file cannot make
    this return an id that is present in the same snapshot.
    """
    taken = set(existing_ids)
    number = len(taken) + 1
    candidate = f'{prefix}{number:03d}'
    while candidate in taken:
        number += 1
        candidate = f'{prefix}{number:03d}'
    return candidate
