"""
Models Package

Exports all models for easy importing.
"""

from zonewatch.models.zone import (
    GeoPoint, Zone, ZoneLog, ZoneSnapshot,
    SEVERITIES, LOG_ACTIONS, MIN_ZONE_POINTS,
    next_identifier, utc_timestamp,
)

__all__ = [
    'GeoPoint', 'Zone', 'ZoneLog', 'ZoneSnapshot',
    'SEVERITIES', 'LOG_ACTIONS', 'MIN_ZONE_POINTS',
    'next_identifier', 'utc_timestamp',
]
