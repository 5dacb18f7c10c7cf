"""
Services Package

Exports all services for easy importing.
"""

from zonewatch.services.geometry import (
    polygon_center, close_ring, to_lnglat, polygon_ring,
    get_severity_color, get_severity_border_color,
    get_severity_badge_variant, get_log_action_color,
)
from zonewatch.services.geojson import EXPORT_FILENAME, zone_feature, zones_to_feature_collection
from zonewatch.services.drawing import DrawingSession
from zonewatch.services.map_surface import MapSurface, InMemoryMapSurface
from zonewatch.services.zone_store import ZoneStore
from zonewatch.services.refresh import RefreshPoller
from zonewatch.services.controller import ZoneEditorController

__all__ = [
    'polygon_center',
    'close_ring',
    'to_lnglat',
    'polygon_ring',
    'get_severity_color',
    'get_severity_border_color',
    'get_severity_badge_variant',
    'get_log_action_color',
    'EXPORT_FILENAME',
    'zone_feature',
    'zones_to_feature_collection',
    'DrawingSession',
    'MapSurface',
    'InMemoryMapSurface',
    'ZoneStore',
    'RefreshPoller',
    'ZoneEditorController',
]
